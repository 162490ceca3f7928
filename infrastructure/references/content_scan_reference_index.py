from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from application.ports.reference_index import ReferenceIndex, ReferenceIndexBuilder
from domain.services.reference_scanner import find_referenced_ids

if TYPE_CHECKING:
    from application.ports.blob_content_reader import BlobContentReader
    from domain.value_objects.blob_record import BlobRecord

logger = structlog.get_logger()


class ContentScanReferenceIndex(ReferenceIndex, ReferenceIndexBuilder):
    """Reference index built by scanning each blob's content for other blobs' ids.

    Only references between blobs of the scanned set are recorded. A blob whose
    content cannot be read, for any reason or within the fetch timeout, contributes
    no references.
    """

    def __init__(
        self,
        content_reader: BlobContentReader,
        *,
        max_concurrency: int = 8,
        fetch_timeout_seconds: float = 30.0,
    ) -> None:
        self.content_reader = content_reader
        self.max_concurrency = max_concurrency
        self.fetch_timeout_seconds = fetch_timeout_seconds
        self._referenced_by: dict[str, set[str]] = defaultdict(set)

    async def build(self, blobs: Sequence[BlobRecord]) -> None:
        """(Re)build the index over ``blobs``."""
        known_ids = {b.id.lower() for b in blobs}
        semaphore = asyncio.Semaphore(self.max_concurrency)
        index: dict[str, set[str]] = defaultdict(set)
        skipped = 0

        async def scan(blob: BlobRecord) -> None:
            nonlocal skipped
            async with semaphore:
                try:
                    content = await asyncio.wait_for(
                        self.content_reader.fetch_bytes(blob.id),
                        timeout=self.fetch_timeout_seconds,
                    )
                except Exception as e:  # noqa: BLE001
                    skipped += 1
                    logger.warning(
                        "reference_scan_skipped",
                        blob_id=blob.id,
                        error=str(e) or type(e).__name__,
                    )
                    return
            for target in find_referenced_ids(content, blob.id, known_ids):
                index[target].add(blob.id.lower())

        await asyncio.gather(*(scan(blob) for blob in blobs))
        self._referenced_by = index
        logger.info(
            "reference_index_built",
            blobs=len(blobs),
            referenced=len(index),
            skipped=skipped,
        )

    async def referenced_by(self, blob_id: str) -> set[str]:
        return set(self._referenced_by.get(blob_id.lower(), ()))
