from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog
from returns.result import Failure, Result, Success

from application.dtos.classification_dtos import BatchClassificationResponse, ClassificationFailure
from application.dtos.errors import AppError
from domain.exceptions import ContentUnavailableError
from domain.services.category_classifier import categorize, is_zip_type
from domain.services.content_sniffer import (
    DEFAULT_PREFIX_BYTES,
    ZIP_MAGIC,
    is_fallback_type,
    sniff,
)
from domain.services.importance_scorer import build_classification
from domain.services.site_structure_analyzer import DEFAULT_MAX_ENTRY_READ_BYTES, analyze_site
from domain.value_objects.blob_category import BlobCategory

if TYPE_CHECKING:
    from application.ports.blob_content_reader import BlobContentReader
    from application.ports.domain_link_resolver import DomainLinkResolver
    from application.ports.reference_index import ReferenceIndex, ReferenceIndexBuilder
    from domain.value_objects.blob_record import BlobRecord
    from domain.value_objects.classification import Classification
    from domain.value_objects.site_descriptor import SiteDescriptor

logger = structlog.get_logger()

DEFAULT_FETCH_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_CONCURRENCY = 8


def _utc_now() -> datetime:
    return datetime.now(UTC)


class _LazyContent:
    """Fetch a blob's bytes at most once; a failed fetch is remembered as unavailable."""

    def __init__(self, reader: BlobContentReader, blob_id: str, timeout: float) -> None:
        self._reader = reader
        self._blob_id = blob_id
        self._timeout = timeout
        self._fetched = False
        self._content: bytes | None = None

    @property
    def available(self) -> bool:
        return self._content is not None

    async def get(self) -> bytes | None:
        if self._fetched:
            return self._content
        self._fetched = True
        try:
            self._content = await asyncio.wait_for(
                self._reader.fetch_bytes(self._blob_id),
                timeout=self._timeout,
            )
        except (ContentUnavailableError, TimeoutError, OSError) as e:
            logger.warning(
                "classify_blob_content_fetch_failed",
                blob_id=self._blob_id,
                error=str(e) or type(e).__name__,
            )
        return self._content


class ClassifyBlobUseCase:
    """Classify a single blob: category, importance, deletability and justification.

    Content is fetched only when needed (no authoritative declared type, or the blob
    may be a site) and at most once. Every external lookup degrades to a conservative
    default on failure:
      - content fetch fails      →  category from metadata only, websites scored LOW
      - reference lookup fails   →  no references
      - domain lookup fails      →  no linked domain
    """

    def __init__(
        self,
        content_reader: BlobContentReader,
        reference_index: ReferenceIndex | None = None,
        domain_link_resolver: DomainLinkResolver | None = None,
        *,
        fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        sniff_prefix_bytes: int = DEFAULT_PREFIX_BYTES,
        max_entry_read_bytes: int = DEFAULT_MAX_ENTRY_READ_BYTES,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.content_reader = content_reader
        self.reference_index = reference_index
        self.domain_link_resolver = domain_link_resolver
        self.fetch_timeout_seconds = fetch_timeout_seconds
        self.sniff_prefix_bytes = sniff_prefix_bytes
        self.max_entry_read_bytes = max_entry_read_bytes
        self.clock = clock

    async def execute(self, blob: BlobRecord) -> Result[Classification, AppError]:
        """Classify one blob from its record and, when needed, its content.

        Args:
            blob: The record to classify

        Returns:
            Result containing the Classification on success or AppError on failure

        """
        try:
            blob = await self._with_head_metadata(blob)
            declared = (
                None if is_fallback_type(blob.declared_content_type) else blob.declared_content_type
            )
            content = _LazyContent(self.content_reader, blob.id, self.fetch_timeout_seconds)

            raw = None if declared else await content.get()
            category = categorize(declared, raw)
            content_type = (
                sniff(raw, declared, prefix_bytes=self.sniff_prefix_bytes)
                if raw is not None
                else declared
            )

            site: SiteDescriptor | None = None
            if category in (BlobCategory.WEBSITE, BlobCategory.ARCHIVE):
                site = await self._analyze(content, category, content_type)
                if category == BlobCategory.ARCHIVE and site is not None and site.has_index_page:
                    category = categorize(declared, await content.get(), site_bundle=True)
                if category != BlobCategory.WEBSITE:
                    site = None

            referenced_by = await self._references(blob.id)
            linked_domain = await self._linked_domain(blob) if site is not None else None

            classification = build_classification(
                blob,
                category,
                site,
                referenced_by,
                content_type=content_type,
                content_available=content.available or category != BlobCategory.WEBSITE,
                linked_domain=linked_domain,
                now=self.clock(),
            )
            logger.debug(
                "classify_blob_done",
                blob_id=blob.id,
                category=classification.category.value,
                importance=classification.importance.value,
                deletable=classification.deletable,
            )
            return Success(classification)
        except Exception as e:  # noqa: BLE001
            # One bad blob must not abort a batch.
            logger.exception("classify_blob_unexpected_error", blob_id=blob.id)
            return Failure(
                AppError(
                    "unexpected",
                    f"Failed to classify blob {blob.id}: {e!s}",
                    blob_id=blob.id,
                ),
            )

    async def _with_head_metadata(self, blob: BlobRecord) -> BlobRecord:
        """Fill in size and content type from the storage network when the record lacks them."""
        if blob.size_bytes is not None and not is_fallback_type(blob.declared_content_type):
            return blob
        try:
            head = await asyncio.wait_for(
                self.content_reader.head_metadata(blob.id),
                timeout=self.fetch_timeout_seconds,
            )
        except (ContentUnavailableError, TimeoutError, OSError) as e:
            logger.warning("classify_blob_head_failed", blob_id=blob.id, error=str(e))
            return blob
        if head is None:
            return blob

        update: dict[str, object] = {}
        if blob.size_bytes is None and head.size_bytes is not None:
            update["size_bytes"] = head.size_bytes
        if is_fallback_type(blob.declared_content_type) and not is_fallback_type(head.content_type):
            update["declared_content_type"] = head.content_type
        return blob.model_copy(update=update) if update else blob

    async def _analyze(
        self,
        content: _LazyContent,
        category: BlobCategory,
        content_type: str | None,
    ) -> SiteDescriptor | None:
        if category == BlobCategory.ARCHIVE and not is_zip_type(content_type):
            return None
        raw = await content.get()
        if raw is None:
            return None
        if category == BlobCategory.ARCHIVE and not raw.startswith(ZIP_MAGIC):
            return None
        return analyze_site(raw, max_entry_read_bytes=self.max_entry_read_bytes)

    async def _references(self, blob_id: str) -> frozenset[str]:
        if self.reference_index is None:
            return frozenset()
        try:
            refs = await self.reference_index.referenced_by(blob_id)
        except Exception as e:  # noqa: BLE001
            logger.warning("classify_blob_reference_lookup_failed", blob_id=blob_id, error=str(e))
            return frozenset()
        return frozenset(refs) - {blob_id}

    async def _linked_domain(self, blob: BlobRecord) -> str | None:
        if self.domain_link_resolver is None:
            return None
        try:
            return await self.domain_link_resolver.linked_domain(blob)
        except Exception as e:  # noqa: BLE001
            logger.warning("classify_blob_domain_lookup_failed", blob_id=blob.id, error=str(e))
            return None


class ClassifyBlobsUseCase:
    """Classify a batch of blobs concurrently with a bounded worker pool.

    Per-blob failures are isolated and reported; they never abort the batch. Setting
    ``cancel_event`` stops new blobs from starting and returns what has completed.
    When a ``reference_index_builder`` is given, it is rebuilt over the batch before
    any blob is classified.
    """

    def __init__(
        self,
        classify_blob: ClassifyBlobUseCase,
        *,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        reference_index_builder: ReferenceIndexBuilder | None = None,
    ) -> None:
        if max_concurrency < 1:
            msg = "max_concurrency must be at least 1"
            raise ValueError(msg)
        self.classify_blob = classify_blob
        self.max_concurrency = max_concurrency
        self.reference_index_builder = reference_index_builder

    async def execute(
        self,
        blobs: Sequence[BlobRecord],
        cancel_event: asyncio.Event | None = None,
    ) -> Result[BatchClassificationResponse, AppError]:
        """Classify ``blobs`` with at most ``max_concurrency`` in flight.

        Args:
            blobs: Records to classify
            cancel_event: When set, blobs not yet started are reported as skipped

        Returns:
            Success with classifications, per-blob failures and skipped ids

        """
        response = BatchClassificationResponse()
        semaphore = asyncio.Semaphore(self.max_concurrency)
        await self._build_reference_index(blobs)

        async def worker(blob: BlobRecord) -> None:
            async with semaphore:
                if cancel_event is not None and cancel_event.is_set():
                    response.skipped.append(blob.id)
                    return
                result = await self.classify_blob.execute(blob)

            if isinstance(result, Success):
                response.classifications.append(result.unwrap())
            else:
                error = result.failure()
                response.failures.append(
                    ClassificationFailure(
                        blob_id=blob.id,
                        category=error.category,
                        message=error.message,
                    ),
                )

        logger.info("classify_blobs_start", count=len(blobs), max_concurrency=self.max_concurrency)
        await asyncio.gather(*(worker(blob) for blob in blobs))
        logger.info(
            "classify_blobs_done",
            classified=len(response.classifications),
            failed=len(response.failures),
            skipped=len(response.skipped),
        )
        return Success(response)

    async def _build_reference_index(self, blobs: Sequence[BlobRecord]) -> None:
        if self.reference_index_builder is None or not blobs:
            return
        try:
            await self.reference_index_builder.build(blobs)
        except Exception as e:  # noqa: BLE001
            # Classification continues against whatever the index already holds.
            logger.warning("classify_blobs_reference_index_failed", error=str(e))
