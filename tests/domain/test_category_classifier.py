"""Tests for the category classifier."""

from __future__ import annotations

import pytest

from domain.services.category_classifier import categorize, categorize_type, is_zip_type
from domain.value_objects.blob_category import BlobCategory
from tests.factories import make_zip


class TestCategorizeByType:
    """Test the ordered declared-type table."""

    @pytest.mark.parametrize(
        ("mime_type", "expected"),
        [
            ("text/html", BlobCategory.WEBSITE),
            ("text/html; charset=utf-8", BlobCategory.WEBSITE),
            ("image/png", BlobCategory.IMAGE),
            ("video/mp4", BlobCategory.VIDEO),
            ("audio/mpeg", BlobCategory.AUDIO),
            ("application/pdf", BlobCategory.DOCUMENT),
            ("application/msword", BlobCategory.DOCUMENT),
            (
                "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
                BlobCategory.DOCUMENT,
            ),
            ("text/plain", BlobCategory.DOCUMENT),
            ("text/css", BlobCategory.DOCUMENT),
            ("application/zip", BlobCategory.ARCHIVE),
            ("application/x-tar", BlobCategory.ARCHIVE),
            ("application/gzip", BlobCategory.ARCHIVE),
            ("application/x-7z-compressed", BlobCategory.ARCHIVE),
            ("application/javascript", BlobCategory.CODE),
            ("application/json", BlobCategory.CODE),
            ("application/xml", BlobCategory.CODE),
            ("application/x-python", BlobCategory.CODE),
            ("application/wasm", BlobCategory.DATA),
            ("binary/blob", BlobCategory.DATA),
            ("chemical/x-pdb", BlobCategory.UNKNOWN),
        ],
    )
    def test_type_rules(self, mime_type: str, expected: BlobCategory) -> None:
        """Test that each declared type maps to its category."""
        assert categorize(mime_type) == expected

    def test_case_insensitive(self) -> None:
        """Test that type matching ignores case."""
        assert categorize_type("IMAGE/PNG") == BlobCategory.IMAGE

    def test_zip_site_bundle_is_website(self) -> None:
        """Test that a zip with an index page is promoted to website."""
        assert categorize("application/zip", site_bundle=True) == BlobCategory.WEBSITE

    def test_site_bundle_flag_ignored_for_non_zip(self) -> None:
        """Test that the site flag does not promote gzip or tar archives."""
        assert categorize("application/gzip", site_bundle=True) == BlobCategory.ARCHIVE
        assert categorize("application/x-tar", site_bundle=True) == BlobCategory.ARCHIVE

    def test_is_zip_type(self) -> None:
        """Test zip type detection excludes gzip."""
        assert is_zip_type("application/zip")
        assert is_zip_type("application/x-zip-compressed")
        assert not is_zip_type("application/gzip")
        assert not is_zip_type(None)


class TestCategorizeBySignature:
    """Test the byte-signature fallback used when no type was declared."""

    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            (b"<!DOCTYPE html><html></html>", BlobCategory.WEBSITE),
            (b"<html><body>hi</body></html>", BlobCategory.WEBSITE),
            (b"\xff\xd8\xff\xe0\x00\x10JFIF", BlobCategory.IMAGE),
            (b"\x89PNG\r\n\x1a\n", BlobCategory.IMAGE),
            (b"GIF89a\x01\x00", BlobCategory.IMAGE),
            (b"%PDF-1.7\n%\xe2\xe3", BlobCategory.DOCUMENT),
            (b'{"name": "x"}', BlobCategory.CODE),
            (b"[1, 2, 3]", BlobCategory.CODE),
            (b"hello there, here is <html> later on", BlobCategory.WEBSITE),
            (b"plain prose without markup", BlobCategory.UNKNOWN),
            (b"\x00\x00\x00\x00", BlobCategory.UNKNOWN),
        ],
    )
    def test_signature_rules(self, content: bytes, expected: BlobCategory) -> None:
        """Test each byte signature."""
        assert categorize(None, content) == expected

    def test_zip_magic_is_archive(self) -> None:
        """Test that zip bytes are an archive until structural analysis says otherwise."""
        content = make_zip({"index.html": "<html></html>"})
        assert categorize(None, content) == BlobCategory.ARCHIVE
        assert categorize(None, content, site_bundle=True) == BlobCategory.WEBSITE

    def test_octet_stream_uses_signature(self) -> None:
        """Test that a fallback declared type defers to the bytes."""
        assert categorize("application/octet-stream", b"\x89PNG\r\n") == BlobCategory.IMAGE

    def test_no_type_no_content_is_unknown(self) -> None:
        """Test that nothing to go on yields unknown."""
        assert categorize(None) == BlobCategory.UNKNOWN
        assert categorize(None, b"") == BlobCategory.UNKNOWN


class TestTotality:
    """categorize never raises and always returns one of the nine categories."""

    @pytest.mark.parametrize(
        "mime_type",
        [None, "", " ", "/", "garbage", "application/", "🙂/🙂", "a" * 10_000],
    )
    def test_any_type(self, mime_type: str | None) -> None:
        """Test arbitrary type strings."""
        assert categorize(mime_type) in set(BlobCategory)

    @pytest.mark.parametrize(
        "content",
        [b"\xff", b"\xff\xfe\xfd" * 300, b"PK", b"{", b"<", bytes(range(256))],
    )
    def test_any_content(self, content: bytes) -> None:
        """Test arbitrary and truncated byte sequences."""
        assert categorize(None, content) in set(BlobCategory)
