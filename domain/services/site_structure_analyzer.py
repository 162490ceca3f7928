"""Decide whether a blob is a site and describe its structure.

A blob is a site when it is either:
  - an archive bundle (zip) with at least one file, with or without an ``index.html``
    (without one, it is reported as a file directory), or
  - a single HTML document.

Corrupt or partially written blobs are expected in a public object store, so every
failure degrades to "not a site" instead of raising.
"""

from __future__ import annotations

import io
import re
import zipfile
import zlib
from collections.abc import Iterable
from pathlib import PurePosixPath

from domain.value_objects.mime_type import MimeType
from domain.value_objects.site_descriptor import (
    UNTITLED_SITE,
    SiteDescriptor,
    SiteResource,
    SiteStructure,
)

INDEX_PAGE = "index.html"
HEADERS_FILE = "_headers"
DEFAULT_MAX_ENTRY_READ_BYTES = 1024 * 1024

EXTENSION_CONTENT_TYPES: dict[str, str] = {
    "html": MimeType.HTML.value,
    "htm": MimeType.HTML.value,
    "css": MimeType.CSS.value,
    "js": MimeType.JAVASCRIPT.value,
    "json": MimeType.JSON.value,
    "png": MimeType.PNG.value,
    "jpg": MimeType.JPEG.value,
    "jpeg": MimeType.JPEG.value,
    "gif": MimeType.GIF.value,
    "svg": MimeType.SVG.value,
    "webp": MimeType.WEBP.value,
    "ico": MimeType.ICO.value,
    "txt": MimeType.PLAIN_TEXT.value,
    "md": MimeType.MARKDOWN.value,
    "pdf": MimeType.PDF.value,
    "zip": MimeType.ZIP.value,
}

_TITLE_RE = re.compile(r"<title[^>]*>([^<]*)</title>", re.IGNORECASE)
_H1_RE = re.compile(r"<h1[^>]*>([^<]*)</h1>", re.IGNORECASE)
_DOCTYPE_RE = re.compile(r"<!DOCTYPE html", re.IGNORECASE)
_HTML_TAG_RE = re.compile(r"<html", re.IGNORECASE)

# Corrupt entries, unsupported compression and encrypted members.
_ARCHIVE_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    ValueError,
    OSError,
    EOFError,
    RuntimeError,
    NotImplementedError,
)


def guess_content_type(path: str) -> str:
    """Infer a resource's content type from its file extension."""
    suffix = PurePosixPath(path).suffix.lstrip(".").lower()
    return EXTENSION_CONTENT_TYPES.get(suffix, MimeType.OCTET_STREAM.value)


def extract_title(html: str) -> str:
    """Return the first <title>, else the first <h1>, else the untitled default."""
    for pattern in (_TITLE_RE, _H1_RE):
        match = pattern.search(html)
        if match:
            return match.group(1).strip()
    return UNTITLED_SITE


def parse_headers_file(text: str) -> dict[str, str]:
    """Parse ``key: value`` lines, skipping blanks, ``#`` comments and ``/path`` lines."""
    headers: dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(("#", "/")):
            continue
        key, sep, value = stripped.partition(":")
        if not sep or not key.strip():
            continue
        headers[key.strip()] = value.strip()
    return headers


def site_directories(resources: Iterable[SiteResource]) -> list[str]:
    """Every strict path prefix of every resource, deduplicated and sorted."""
    dirs: set[str] = set()
    for resource in resources:
        parts = resource.path.split("/")
        for i in range(1, len(parts)):
            prefix = "/".join(parts[:i])
            if prefix:
                dirs.add(prefix)
    return sorted(dirs)


def describe_structure(site: SiteDescriptor) -> SiteStructure:
    return SiteStructure(
        has_index_page=site.has_index_page,
        has_headers=site.custom_headers is not None,
        resource_count=len(site.resources),
        directories=tuple(site_directories(site.resources)),
    )


def _is_reserved_entry(path: str, name: str) -> bool:
    """Match ``name`` at the bundle root or under exactly one leading directory."""
    if path == name:
        return True
    head, sep, tail = path.partition("/")
    return bool(sep) and bool(head) and tail == name


def _read_text(archive: zipfile.ZipFile, info: zipfile.ZipInfo, limit: int) -> str:
    with archive.open(info) as fh:
        return fh.read(limit).decode("utf-8", errors="replace")


def _open_archive(data: bytes) -> zipfile.ZipFile | None:
    try:
        return zipfile.ZipFile(io.BytesIO(data))
    except _ARCHIVE_ERRORS:
        return None


def _analyze_archive(archive: zipfile.ZipFile, max_entry_read_bytes: int) -> SiteDescriptor | None:
    resources: list[SiteResource] = []
    has_index_page = False
    title = UNTITLED_SITE
    headers: dict[str, str] = {}

    for info in archive.infolist():
        if info.is_dir():
            continue
        path = info.filename
        if not has_index_page and _is_reserved_entry(path, INDEX_PAGE):
            has_index_page = True
            title = extract_title(_read_text(archive, info, max_entry_read_bytes))
        elif not headers and _is_reserved_entry(path, HEADERS_FILE):
            headers = parse_headers_file(_read_text(archive, info, max_entry_read_bytes))
        resources.append(
            SiteResource(
                path=path,
                content_type=guess_content_type(path),
                size_bytes=info.file_size,
            ),
        )

    if not has_index_page and not resources:
        return None

    return SiteDescriptor(
        has_index_page=has_index_page,
        resources=tuple(resources),
        custom_headers=headers or None,
        is_file_directory=not has_index_page,
        title=title,
    )


def looks_like_html_document(text: str) -> bool:
    """Loose single-page check: doctype, an ``<html`` tag, or tag-like markup with a closer."""
    if _DOCTYPE_RE.search(text) or _HTML_TAG_RE.search(text):
        return True
    return "<" in text and ">" in text and "</" in text


def _analyze_single_page(data: bytes) -> SiteDescriptor | None:
    text = data.decode("utf-8", errors="replace")
    if not looks_like_html_document(text):
        return None
    return SiteDescriptor(
        has_index_page=True,
        resources=(
            SiteResource(path=INDEX_PAGE, content_type=MimeType.HTML.value, size_bytes=len(data)),
        ),
        custom_headers=None,
        is_file_directory=False,
        title=extract_title(text),
    )


def analyze_site(
    data: bytes,
    *,
    max_entry_read_bytes: int = DEFAULT_MAX_ENTRY_READ_BYTES,
) -> SiteDescriptor | None:
    """Return a SiteDescriptor for ``data``, or None when it is not a site.

    Archive bytes are analyzed as a bundle; anything else is checked for being a
    single HTML page. Never raises.

    Args:
        data: Raw blob bytes
        max_entry_read_bytes: Bound on how much of ``index.html`` / ``_headers`` is read

    """
    if not data:
        return None
    data = bytes(data)
    archive = _open_archive(data)
    if archive is not None:
        try:
            with archive:
                return _analyze_archive(archive, max_entry_read_bytes)
        except _ARCHIVE_ERRORS:
            return None
    return _analyze_single_page(data)
