from pydantic import BaseModel, Field


class DeletionFailure(BaseModel):
    blob_id: str
    error: str


class DeletionResult(BaseModel):
    successful: list[str] = Field(default_factory=list)
    failed: list[DeletionFailure] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    total_deleted: int = 0
    total_size_freed: int = 0
    total_cost_saved: int = Field(0, description="Storage rebate units (MIST) recovered")
