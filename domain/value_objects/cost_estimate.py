from pydantic import BaseModel, ConfigDict, Field


class CostEstimate(BaseModel):
    """Expected refund for deleting one blob. Amounts are in SUI."""

    model_config = ConfigDict(frozen=True)

    blob_id: str
    storage_rebate: float = 0.0
    estimated_gas_cost: float
    net_refund: float = 0.0
    deletable: bool = False
    reason: str | None = None


class CostBatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    batch_number: int = Field(..., ge=1)
    blob_count: int
    estimated_gas: float
    net_refund: float


class BatchCostEstimate(BaseModel):
    """Totals for deleting a set of blobs in fixed-size transaction batches."""

    model_config = ConfigDict(frozen=True)

    total_blobs: int
    total_storage_rebate: float
    total_estimated_gas: float
    total_net_refund: float
    batches: tuple[CostBatch, ...] = ()
