from collections.abc import Sequence
from typing import Protocol

from domain.value_objects.blob_record import BlobRecord


class ReferenceIndex(Protocol):
    """Port answering which other blobs embed or depend on a given blob."""

    async def referenced_by(self, blob_id: str) -> set[str]:
        """Return ids of blobs referencing ``blob_id``; empty when none are known."""
        ...


class ReferenceIndexBuilder(Protocol):
    """Port for reference indexes that are (re)built over a blob set before lookups."""

    async def build(self, blobs: Sequence[BlobRecord]) -> None:
        ...
