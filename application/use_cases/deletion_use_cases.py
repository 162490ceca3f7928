from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog
from returns.result import Failure, Result, Success

from application.dtos.deletion_dtos import DeletionFailure, DeletionResult
from application.dtos.errors import AppError
from domain.services.cleanup_analyzer import analyze_cleanup
from domain.services.deletion_planner import plan as build_plan

if TYPE_CHECKING:
    from application.dtos.classification_dtos import BatchClassificationResponse
    from application.ports.blob_record_source import BlobRecordSource
    from application.ports.deletion_executor import DeletionExecutor
    from application.ports.reference_index import ReferenceIndex
    from application.use_cases.classification_use_cases import ClassifyBlobsUseCase
    from domain.value_objects.blob_record import BlobRecord
    from domain.value_objects.cleanup_report import CleanupAnalysis
    from domain.value_objects.deletion_plan import DeletionFilters, DeletionPlan

logger = structlog.get_logger()


async def _classify(
    classify_blobs: ClassifyBlobsUseCase,
    blobs: Sequence[BlobRecord],
) -> Result[BatchClassificationResponse, AppError]:
    result = await classify_blobs.execute(blobs)
    if isinstance(result, Success) and result.unwrap().failures:
        logger.warning(
            "classification_failures_excluded",
            failed=[f.blob_id for f in result.unwrap().failures],
        )
    return result


class CreateDeletionPlanUseCase:
    """Classify a set of blobs and build a deletion plan from the deletable ones.

    Blobs that could not be classified are left out of the plan.
    """

    def __init__(self, classify_blobs: ClassifyBlobsUseCase) -> None:
        self.classify_blobs = classify_blobs

    async def execute(
        self,
        blobs: Sequence[BlobRecord],
        filters: DeletionFilters | None = None,
    ) -> Result[DeletionPlan, AppError]:
        """Build an advisory deletion plan for ``blobs``.

        Args:
            blobs: Records to classify and plan over
            filters: Optional category, importance and size filters

        Returns:
            Result containing the DeletionPlan on success or AppError on failure

        """
        classified = await _classify(self.classify_blobs, blobs)
        if isinstance(classified, Failure):
            return classified

        deletion_plan = build_plan(classified.unwrap().classifications, filters)
        logger.info(
            "deletion_plan_created",
            targets=len(deletion_plan.targets),
            total_size_reduction=deletion_plan.total_size_reduction,
            total_cost_savings=deletion_plan.total_cost_savings,
            warnings=list(deletion_plan.warnings),
        )
        return Success(deletion_plan)


class AnalyzeCleanupUseCase:
    """Classify a set of blobs and report cleanup recommendations. Changes nothing."""

    def __init__(self, classify_blobs: ClassifyBlobsUseCase) -> None:
        self.classify_blobs = classify_blobs

    async def execute(self, blobs: Sequence[BlobRecord]) -> Result[CleanupAnalysis, AppError]:
        """Report cleanup recommendations and per-category stats for ``blobs``.

        Args:
            blobs: Records to classify and analyze

        Returns:
            Result containing the CleanupAnalysis on success or AppError on failure

        """
        classified = await _classify(self.classify_blobs, blobs)
        if isinstance(classified, Failure):
            return classified

        analysis = analyze_cleanup(classified.unwrap().classifications)
        logger.info(
            "cleanup_analysis_created",
            total_blobs=analysis.total_blobs,
            recommendations=[r.type.value for r in analysis.recommendations],
        )
        return Success(analysis)


class ExecuteDeletionPlanUseCase:
    """Hand a deletion plan's targets to the deletion executor, one blob at a time.

    Each target is re-checked against a fresh record and the reference index right
    before it is handed over; the actual deletion happens out of process.
    """

    def __init__(
        self,
        deletion_executor: DeletionExecutor,
        blob_record_source: BlobRecordSource,
        reference_index: ReferenceIndex | None = None,
    ) -> None:
        self.deletion_executor = deletion_executor
        self.blob_record_source = blob_record_source
        self.reference_index = reference_index

    async def execute(self, deletion_plan: DeletionPlan) -> Result[DeletionResult, AppError]:
        """Submit each target of ``deletion_plan`` that still passes the re-check.

        Args:
            deletion_plan: Plan whose targets are handed to the executor in order

        Returns:
            Result containing the DeletionResult; per-blob failures are recorded in it

        """
        result = DeletionResult()

        for blob_id in deletion_plan.targets:
            try:
                record = await self.blob_record_source.get_blob(blob_id)
                if record is None:
                    result.failed.append(DeletionFailure(blob_id=blob_id, error="Blob not found"))
                    continue
                if not record.deletable_flag:
                    result.skipped.append(blob_id)
                    logger.warning("deletion_skipped_not_deletable", blob_id=blob_id)
                    continue
                if self.reference_index is not None and await self.reference_index.referenced_by(
                    blob_id,
                ):
                    result.failed.append(
                        DeletionFailure(
                            blob_id=blob_id,
                            error="Blob is still referenced by other blobs",
                        ),
                    )
                    continue

                if not await self.deletion_executor.delete(blob_id):
                    result.failed.append(DeletionFailure(blob_id=blob_id, error="Deletion failed"))
                    continue

                result.successful.append(blob_id)
                result.total_deleted += 1
                result.total_size_freed += record.size_bytes or 0
                result.total_cost_saved += record.storage_rebate_units
            except Exception as e:  # noqa: BLE001
                logger.exception("deletion_failed", blob_id=blob_id)
                result.failed.append(DeletionFailure(blob_id=blob_id, error=str(e)))

        logger.info(
            "deletion_plan_executed",
            deleted=result.total_deleted,
            failed=len(result.failed),
            skipped=len(result.skipped),
        )
        return Success(result)
