from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class BlobHead:
    size_bytes: int | None
    content_type: str | None


class BlobContentReader(Protocol):
    """Port for reading blob content and metadata from the storage network.

    ``fetch_bytes`` raises ContentUnavailableError when the blob is missing or the
    read fails (timeout, network). ``head_metadata`` returns None when the blob is
    unknown.
    """

    async def fetch_bytes(self, blob_id: str) -> bytes: ...

    async def head_metadata(self, blob_id: str) -> BlobHead | None: ...
