from __future__ import annotations

import asyncio
import json
from typing import Any

import fsspec

from domain.exceptions import InfrastructureError


def _read(url: str, storage_options: dict) -> list[Any]:
    with fsspec.open(url, "r", encoding="utf-8", **storage_options) as f:
        payload = json.load(f)
    if isinstance(payload, dict):
        payload = payload.get("data", [])
    if not isinstance(payload, list):
        msg = f"Snapshot at {url} is not a list of objects"
        raise InfrastructureError(msg)
    return payload


async def load_json_objects(url: str, storage_options: dict | None = None) -> list[Any]:
    """Read a JSON array of raw chain objects from any fsspec URL.

    A top-level ``{"data": [...]}`` envelope, as returned by RPC queries, is unwrapped.
    Raises InfrastructureError when the file is missing, unreadable or not a list.
    """
    try:
        return await asyncio.to_thread(_read, url, storage_options or {})
    except (OSError, ValueError) as e:
        msg = f"Failed to load snapshot {url}: {e!s}"
        raise InfrastructureError(msg) from e
