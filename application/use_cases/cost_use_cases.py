from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog
from returns.result import Failure, Result, Success

from application.dtos.errors import AppError
from domain.exceptions import ValidationError
from domain.services.cost_estimator import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_GAS_PER_DELETION,
    estimate_batches,
    estimate_costs,
)

if TYPE_CHECKING:
    from domain.value_objects.blob_record import BlobRecord
    from domain.value_objects.cost_estimate import BatchCostEstimate
    from domain.value_objects.deletion_plan import DeletionPlan

logger = structlog.get_logger()


class EstimateDeletionRefundUseCase:
    """Estimate the net refund of deleting blobs, optionally restricted to a plan's targets."""

    def __init__(
        self,
        *,
        gas_per_deletion: float = DEFAULT_GAS_PER_DELETION,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        self.gas_per_deletion = gas_per_deletion
        self.batch_size = batch_size

    def execute(
        self,
        blobs: Sequence[BlobRecord],
        deletion_plan: DeletionPlan | None = None,
    ) -> Result[BatchCostEstimate, AppError]:
        """Estimate refunds for the deletable blobs among ``blobs``.

        Args:
            blobs: Records to estimate
            deletion_plan: If given, only its targets are estimated

        Returns:
            Result containing BatchCostEstimate on success or AppError on failure

        """
        if deletion_plan is not None:
            targets = set(deletion_plan.targets)
            blobs = [b for b in blobs if b.id in targets]

        estimates = estimate_costs(blobs, gas_per_deletion=self.gas_per_deletion)
        deletable = [e for e in estimates if e.deletable]
        try:
            batch_estimate = estimate_batches(deletable, batch_size=self.batch_size)
        except ValidationError as e:
            return Failure(AppError("validation", f"Validation error: {e!s}"))

        logger.info(
            "refund_estimated",
            blobs=len(estimates),
            deletable=len(deletable),
            net_refund=batch_estimate.total_net_refund,
        )
        return Success(batch_estimate)
