"""Map a declared MIME type, or failing that a byte signature, to a BlobCategory.

Both lookups are ordered tables evaluated top to bottom; the first matching rule
wins. New types are added as table rows, not as new branches.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import NamedTuple

from domain.services.content_sniffer import is_fallback_type
from domain.value_objects.blob_category import BlobCategory

_SIGNATURE_BYTES = 16
_TEXT_SCAN_BYTES = 512


class TypeContext(NamedTuple):
    mime_type: str
    site_bundle: bool


TypeRule = tuple[Callable[[TypeContext], bool], BlobCategory]
SignatureRule = tuple[Callable[[bytes], bool], BlobCategory]


def _contains(*needles: str) -> Callable[[TypeContext], bool]:
    return lambda ctx: any(needle in ctx.mime_type for needle in needles)


def _starts_with(prefix: str) -> Callable[[TypeContext], bool]:
    return lambda ctx: ctx.mime_type.startswith(prefix)


def is_zip_type(mime_type: str | None) -> bool:
    lowered = (mime_type or "").lower()
    return "zip" in lowered and "gzip" not in lowered


TYPE_RULES: tuple[TypeRule, ...] = (
    (_contains("text/html"), BlobCategory.WEBSITE),
    (lambda ctx: ctx.site_bundle and is_zip_type(ctx.mime_type), BlobCategory.WEBSITE),
    (_starts_with("image/"), BlobCategory.IMAGE),
    (_starts_with("video/"), BlobCategory.VIDEO),
    (_starts_with("audio/"), BlobCategory.AUDIO),
    (_contains("pdf", "document", "msword", "openxml", "text/"), BlobCategory.DOCUMENT),
    (_contains("zip", "tar", "rar", "7z", "gzip"), BlobCategory.ARCHIVE),
    (_contains("javascript", "typescript", "python", "json", "xml"), BlobCategory.CODE),
    (_contains("application/", "binary"), BlobCategory.DATA),
)


def _signature_contains(needle: bytes) -> Callable[[bytes], bool]:
    return lambda content: needle in content[:_SIGNATURE_BYTES]


def _signature_starts_with(magic: bytes) -> Callable[[bytes], bool]:
    return lambda content: content.startswith(magic)


def _text_prefix(content: bytes) -> str:
    return content[:_TEXT_SCAN_BYTES].decode("utf-8", errors="replace")


def _text_is_json(content: bytes) -> bool:
    try:
        json.loads(_text_prefix(content))
    except ValueError:
        return False
    return True


def _text_mentions_html(content: bytes) -> bool:
    text = _text_prefix(content)
    return "<html" in text or "<!DOCTYPE" in text


SIGNATURE_RULES: tuple[SignatureRule, ...] = (
    (_signature_contains(b"<!DOCTYPE html"), BlobCategory.WEBSITE),
    (_signature_contains(b"<html"), BlobCategory.WEBSITE),
    # Site-ness of a zip is decided later by structural analysis.
    (_signature_starts_with(b"PK"), BlobCategory.ARCHIVE),
    (_signature_starts_with(b"\xff\xd8"), BlobCategory.IMAGE),  # JPEG
    (_signature_starts_with(b"\x89P"), BlobCategory.IMAGE),  # PNG
    (_signature_starts_with(b"GI"), BlobCategory.IMAGE),  # GIF
    (_signature_contains(b"%PDF"), BlobCategory.DOCUMENT),
    (_text_is_json, BlobCategory.CODE),
    (_text_mentions_html, BlobCategory.WEBSITE),
)


def categorize_type(mime_type: str, *, site_bundle: bool = False) -> BlobCategory:
    ctx = TypeContext(mime_type=mime_type.strip().lower(), site_bundle=site_bundle)
    for predicate, category in TYPE_RULES:
        if predicate(ctx):
            return category
    return BlobCategory.UNKNOWN


def categorize_content(content: bytes) -> BlobCategory:
    for predicate, category in SIGNATURE_RULES:
        if predicate(content):
            return category
    return BlobCategory.UNKNOWN


def categorize(
    mime_type: str | None,
    content: bytes | None = None,
    *,
    site_bundle: bool = False,
) -> BlobCategory:
    """Return the category for a blob. Total: every input maps to exactly one category.

    Args:
        mime_type: Declared content type. Absent or octet-stream means "not declared".
        content: Raw bytes, consulted only when no type was declared
        site_bundle: True when structural analysis found an index page in the archive

    """
    if not is_fallback_type(mime_type):
        return categorize_type(mime_type, site_bundle=site_bundle)  # type: ignore[arg-type]
    if not content:
        return BlobCategory.UNKNOWN
    category = categorize_content(bytes(content))
    if category == BlobCategory.ARCHIVE and site_bundle:
        return BlobCategory.WEBSITE
    return category
