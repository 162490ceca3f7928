"""Mock implementations for testing."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from application.ports.blob_content_reader import BlobHead
from domain.exceptions import ContentUnavailableError, InfrastructureError
from domain.value_objects.blob_record import BlobRecord


# ---------------------------------------------------------------------------
# Storage network mocks
# ---------------------------------------------------------------------------


class MockBlobContentReader:
    """In-memory BlobContentReader. Unknown ids raise ContentUnavailableError.

    ``errors`` maps blob ids to exceptions raised instead of returning content.
    """

    def __init__(
        self,
        contents: dict[str, bytes] | None = None,
        heads: dict[str, BlobHead] | None = None,
        *,
        delay: float = 0.0,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self.contents = contents or {}
        self.heads = heads or {}
        self.delay = delay
        self.errors = errors or {}
        self.fetch_calls: list[str] = []
        self.head_calls: list[str] = []

    async def fetch_bytes(self, blob_id: str) -> bytes:
        self.fetch_calls.append(blob_id)
        if self.delay:
            await asyncio.sleep(self.delay)
        if blob_id in self.errors:
            raise self.errors[blob_id]
        if blob_id not in self.contents:
            msg = f"Blob {blob_id} not found"
            raise ContentUnavailableError(msg)
        return self.contents[blob_id]

    async def head_metadata(self, blob_id: str) -> BlobHead | None:
        self.head_calls.append(blob_id)
        return self.heads.get(blob_id)


class FailingBlobContentReader:
    """Reader whose every call fails like a network outage."""

    async def fetch_bytes(self, blob_id: str) -> bytes:
        msg = f"timeout reading {blob_id}"
        raise ContentUnavailableError(msg)

    async def head_metadata(self, blob_id: str) -> BlobHead | None:
        msg = f"timeout reading {blob_id}"
        raise ContentUnavailableError(msg)


# ---------------------------------------------------------------------------
# Lookup mocks
# ---------------------------------------------------------------------------


class MockReferenceIndex:
    def __init__(
        self,
        references: dict[str, set[str]] | None = None,
        *,
        fail: bool = False,
    ) -> None:
        self.references = references or {}
        self.fail = fail

    async def referenced_by(self, blob_id: str) -> set[str]:
        if self.fail:
            msg = "reference index unavailable"
            raise RuntimeError(msg)
        return set(self.references.get(blob_id, set()))


class MockReferenceIndexBuilder:
    """Records every build; ``fail`` makes each build raise."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.builds: list[list[str]] = []

    async def build(self, blobs: Sequence[BlobRecord]) -> None:
        if self.fail:
            msg = "reference scan crashed"
            raise RuntimeError(msg)
        self.builds.append([b.id for b in blobs])


class MockDomainLinkResolver:
    def __init__(self, domains: dict[str, str] | None = None) -> None:
        self.domains = domains or {}
        self.calls: list[str] = []

    async def linked_domain(self, blob: BlobRecord) -> str | None:
        self.calls.append(blob.id)
        return self.domains.get(blob.id)


class MockBlobRecordSource:
    def __init__(self, blobs: list[BlobRecord] | None = None, *, fail: bool = False) -> None:
        self.blobs = {b.id: b for b in blobs or []}
        self.fail = fail

    async def list_blobs(self, owner_address: str) -> list[BlobRecord]:
        if self.fail:
            msg = "chain unavailable"
            raise InfrastructureError(msg)
        return [b for b in self.blobs.values() if b.owner_address == owner_address]

    async def get_blob(self, blob_id: str) -> BlobRecord | None:
        return self.blobs.get(blob_id)


# ---------------------------------------------------------------------------
# Deletion executor mock
# ---------------------------------------------------------------------------


class MockDeletionExecutor:
    def __init__(self, *, refuse: set[str] | None = None, explode: set[str] | None = None) -> None:
        self.refuse = refuse or set()
        self.explode = explode or set()
        self.deleted: list[str] = []

    async def delete(self, blob_id: str) -> bool:
        if blob_id in self.explode:
            msg = f"transaction rejected for {blob_id}"
            raise RuntimeError(msg)
        if blob_id in self.refuse:
            return False
        self.deleted.append(blob_id)
        return True
