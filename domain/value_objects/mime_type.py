from enum import Enum


class MimeType(str, Enum):
    """Represent MIME types the sniffer and site analyzer produce or recognize."""

    OCTET_STREAM = "application/octet-stream"
    """Generic fallback; never treated as authoritative when declared."""

    HTML = "text/html"
    CSS = "text/css"
    PLAIN_TEXT = "text/plain"
    MARKDOWN = "text/markdown"

    JSON = "application/json"
    JAVASCRIPT = "application/javascript"
    PDF = "application/pdf"
    ZIP = "application/zip"

    PNG = "image/png"
    JPEG = "image/jpeg"
    GIF = "image/gif"
    SVG = "image/svg+xml"
    WEBP = "image/webp"
    ICO = "image/x-icon"
