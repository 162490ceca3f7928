"""Shared test fixtures and configuration."""

from __future__ import annotations

from datetime import datetime

import pytest

from tests.factories import FIXED_NOW, make_zip


@pytest.fixture
def fixed_now() -> datetime:
    """Return the pinned reference time."""
    return FIXED_NOW


@pytest.fixture
def site_zip() -> bytes:
    """A small site bundle with an index page, a stylesheet and a _headers file."""
    return make_zip(
        {
            "index.html": "<html><head><title> My Site </title></head><body></body></html>",
            "style.css": "body { color: red; }",
            "_headers": "# comment\n/*\nContent-Type: text/html\n\n",
        },
    )


@pytest.fixture
def file_directory_zip() -> bytes:
    """A bundle of plain files with no index page."""
    return make_zip(
        {
            "docs/": b"",
            "docs/readme.txt": "hello",
            "docs/img/logo.png": b"\x89PNG\r\n\x1a\n0000",
        },
    )
