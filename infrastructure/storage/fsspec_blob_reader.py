from __future__ import annotations

import asyncio
from typing import Any

import fsspec
import structlog

from application.ports.blob_content_reader import BlobContentReader, BlobHead
from domain.exceptions import ContentUnavailableError

logger = structlog.get_logger()

_CONTENT_TYPE_KEYS = ("mimetype", "ContentType", "content_type", "content-type")


class FsspecBlobReader(BlobContentReader):
    """Read blobs from any fsspec URL laid out as ``{base_url}/{blob_id}``.

    Works against a public aggregator over HTTP(S) as well as local or object-store
    mirrors. fsspec is synchronous here, so calls run in a worker thread.
    """

    def __init__(self, base_url: str, *, storage_options: dict | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.storage_options = storage_options or {}

    def _url(self, blob_id: str) -> str:
        return f"{self.base_url}/{blob_id}"

    def _read(self, blob_id: str) -> bytes:
        with fsspec.open(self._url(blob_id), "rb", **self.storage_options) as f:
            return f.read()

    def _info(self, blob_id: str) -> dict[str, Any]:
        fs, path = fsspec.core.url_to_fs(self._url(blob_id), **self.storage_options)
        return fs.info(path)

    async def fetch_bytes(self, blob_id: str) -> bytes:
        try:
            return await asyncio.to_thread(self._read, blob_id)
        except FileNotFoundError as e:
            msg = f"Blob {blob_id} not found"
            raise ContentUnavailableError(msg) from e
        except OSError as e:
            msg = f"Failed to read blob {blob_id}: {e!s}"
            raise ContentUnavailableError(msg) from e

    async def head_metadata(self, blob_id: str) -> BlobHead | None:
        try:
            info = await asyncio.to_thread(self._info, blob_id)
        except FileNotFoundError:
            return None
        except OSError as e:
            msg = f"Failed to stat blob {blob_id}: {e!s}"
            raise ContentUnavailableError(msg) from e

        content_type = next(
            (info[key] for key in _CONTENT_TYPE_KEYS if isinstance(info.get(key), str)),
            None,
        )
        size = info.get("size")
        logger.debug("blob_head", blob_id=blob_id, size=size, content_type=content_type)
        return BlobHead(
            size_bytes=size if isinstance(size, int) else None,
            content_type=content_type,
        )
