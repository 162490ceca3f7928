"""Expected net refund from deleting blobs, before any transaction is built."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from domain.exceptions import ValidationError
from domain.value_objects.blob_record import BlobRecord
from domain.value_objects.cost_estimate import BatchCostEstimate, CostBatch, CostEstimate

MIST_PER_SUI = 1_000_000_000
DEFAULT_GAS_PER_DELETION = 0.005  # SUI
DEFAULT_BATCH_SIZE = 10

REASON_NOT_DELETABLE = "Blob was not created with --deletable flag"
REASON_NO_OBJECT = "No storage object ID available"


def mist_to_sui(mist: int) -> float:
    return mist / MIST_PER_SUI


def estimate_cost(
    blob: BlobRecord,
    *,
    gas_per_deletion: float = DEFAULT_GAS_PER_DELETION,
) -> CostEstimate:
    """Estimate the refund for one blob. Without a storage object there is nothing to reclaim."""
    if not blob.storage_object_id:
        return CostEstimate(
            blob_id=blob.id,
            estimated_gas_cost=gas_per_deletion,
            reason=REASON_NO_OBJECT,
        )

    rebate = mist_to_sui(blob.storage_rebate_units)
    return CostEstimate(
        blob_id=blob.id,
        storage_rebate=rebate,
        estimated_gas_cost=gas_per_deletion,
        net_refund=rebate - gas_per_deletion,
        deletable=blob.deletable_flag,
        reason=None if blob.deletable_flag else REASON_NOT_DELETABLE,
    )


def estimate_costs(
    blobs: Iterable[BlobRecord],
    *,
    gas_per_deletion: float = DEFAULT_GAS_PER_DELETION,
) -> list[CostEstimate]:
    return [estimate_cost(blob, gas_per_deletion=gas_per_deletion) for blob in blobs]


def estimate_batches(
    estimates: Sequence[CostEstimate],
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> BatchCostEstimate:
    """Group estimates into fixed-size deletion batches and total them.

    Raises:
        ValidationError: If batch_size is not positive

    """
    if batch_size < 1:
        msg = "batch_size must be at least 1"
        raise ValidationError(msg)

    total_rebate = sum(e.storage_rebate for e in estimates)
    total_gas = sum(e.estimated_gas_cost for e in estimates)

    batches = []
    for start in range(0, len(estimates), batch_size):
        chunk = estimates[start : start + batch_size]
        gas = sum(e.estimated_gas_cost for e in chunk)
        rebate = sum(e.storage_rebate for e in chunk)
        batches.append(
            CostBatch(
                batch_number=start // batch_size + 1,
                blob_count=len(chunk),
                estimated_gas=gas,
                net_refund=rebate - gas,
            ),
        )

    return BatchCostEstimate(
        total_blobs=len(estimates),
        total_storage_rebate=total_rebate,
        total_estimated_gas=total_gas,
        total_net_refund=total_rebate - total_gas,
        batches=tuple(batches),
    )
