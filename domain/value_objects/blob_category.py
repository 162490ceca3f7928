from enum import Enum


class BlobCategory(str, Enum):
    """Enumerate the content categories a blob can be classified into."""

    WEBSITE = "website"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    ARCHIVE = "archive"
    CODE = "code"
    DATA = "data"
    UNKNOWN = "unknown"
