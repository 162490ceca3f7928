from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from returns.result import Failure, Result, Success

from application.dtos.errors import AppError
from domain.exceptions import ContentUnavailableError, InfrastructureError
from domain.services.inventory_summary import summarize_inventory

if TYPE_CHECKING:
    from application.ports.blob_record_source import BlobRecordSource
    from application.use_cases.classification_use_cases import ClassifyBlobsUseCase
    from domain.value_objects.inventory_summary import InventorySummary

logger = structlog.get_logger()


class SummarizeInventoryUseCase:
    """Enumerate an owner's blobs, classify them and roll the result up into a summary."""

    def __init__(
        self,
        blob_record_source: BlobRecordSource,
        classify_blobs: ClassifyBlobsUseCase,
    ) -> None:
        self.blob_record_source = blob_record_source
        self.classify_blobs = classify_blobs

    async def execute(self, owner_address: str) -> Result[InventorySummary, AppError]:
        """Summarize the blobs owned by ``owner_address``.

        Args:
            owner_address: Account whose blobs are enumerated

        Returns:
            Result containing InventorySummary on success or AppError on failure

        """
        if not owner_address or not owner_address.strip():
            return Failure(AppError("validation", "Owner address cannot be empty"))

        try:
            blobs = await self.blob_record_source.list_blobs(owner_address)
        except (ContentUnavailableError, InfrastructureError) as e:
            logger.warning("inventory_enumeration_failed", owner=owner_address, error=str(e))
            return Failure(AppError("infrastructure", f"Failed to list blobs: {e!s}"))

        classified = await self.classify_blobs.execute(blobs)
        if isinstance(classified, Failure):
            return classified

        summary = summarize_inventory(owner_address, blobs, classified.unwrap().by_blob_id())
        logger.info(
            "inventory_summarized",
            owner=owner_address,
            total_blobs=summary.total_blobs,
            deletable_blobs=summary.deletable_blobs,
        )
        return Success(summary)
