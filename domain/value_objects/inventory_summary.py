from pydantic import BaseModel, ConfigDict, Field

from domain.value_objects.blob_category import BlobCategory


class InventorySummary(BaseModel):
    """Per-owner rollup of what an account stores and what it could reclaim."""

    model_config = ConfigDict(frozen=True)

    owner_address: str
    total_blobs: int = 0
    total_size: int = 0
    total_cost: int = Field(0, description="Sum of storage rebate units (MIST)")
    categories: dict[BlobCategory, int] = Field(default_factory=dict)
    deletable_blobs: int = 0
    deletable_size: int = 0
    potential_savings: int = 0
    websites: int = 0
    expired_blobs: int = 0
