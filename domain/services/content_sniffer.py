"""Infer a MIME type from raw bytes when no authoritative type was declared."""

from __future__ import annotations

import json

from domain.value_objects.mime_type import MimeType

DEFAULT_PREFIX_BYTES = 1024

# Fraction of control bytes above which a prefix is no longer considered text.
_CONTROL_BYTE_LIMIT = 0.30
_TEXT_CONTROL_BYTES = frozenset(b"\t\n\r")
ZIP_MAGIC = b"PK"
_UTF8_BOM = b"\xef\xbb\xbf"
_HTML_OPENERS = (b"<!doctype html", b"<html")


def is_fallback_type(mime_type: str | None) -> bool:
    """Return True when the type is absent, blank or the generic octet-stream fallback."""
    if mime_type is None or not mime_type.strip():
        return True
    return mime_type.strip().lower() == MimeType.OCTET_STREAM.value


def looks_like_html(data: bytes) -> bool:
    """Return True if the bytes open with an HTML doctype or ``<html`` tag."""
    head = data.removeprefix(_UTF8_BOM).lstrip()[:32].lower()
    return head.startswith(_HTML_OPENERS)


def looks_like_text(data: bytes) -> bool:
    if not data:
        return False
    control = sum(1 for b in data if b < 0x20 and b not in _TEXT_CONTROL_BYTES)
    return control / len(data) < _CONTROL_BYTE_LIMIT


def parses_as_json(data: bytes) -> bool:
    try:
        json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return False
    return True


def sniff(
    data: bytes,
    declared_type: str | None = None,
    *,
    prefix_bytes: int = DEFAULT_PREFIX_BYTES,
) -> str:
    """Return the declared type if authoritative, otherwise a type inferred from ``data``.

    Only the first ``prefix_bytes`` bytes are inspected. The result is deterministic
    and the function never raises; anything unrecognized is the octet-stream fallback.

    Args:
        data: Raw blob bytes (may be empty or truncated)
        declared_type: Type supplied by the network, if any
        prefix_bytes: Upper bound on how much of ``data`` is examined

    Returns:
        A MIME type string

    """
    if not is_fallback_type(declared_type):
        return declared_type  # type: ignore[return-value]

    prefix = bytes(data[: max(prefix_bytes, 16)])
    if looks_like_html(prefix):
        return MimeType.HTML.value
    if prefix.startswith(ZIP_MAGIC):
        return MimeType.ZIP.value
    if parses_as_json(prefix):
        return MimeType.JSON.value
    if looks_like_text(prefix):
        return MimeType.PLAIN_TEXT.value
    return MimeType.OCTET_STREAM.value
