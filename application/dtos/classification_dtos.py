from pydantic import BaseModel, Field

from domain.value_objects.classification import Classification


class ClassificationFailure(BaseModel):
    blob_id: str = Field(..., description="Blob that could not be classified")
    category: str = Field(..., description="AppError category")
    message: str = Field(..., description="Human-readable failure description")


class BatchClassificationResponse(BaseModel):
    classifications: list[Classification] = Field(
        default_factory=list,
        description="Completed classifications, in completion order",
    )
    failures: list[ClassificationFailure] = Field(default_factory=list)
    skipped: list[str] = Field(
        default_factory=list,
        description="Blob ids never started because the batch was cancelled",
    )

    def by_blob_id(self) -> dict[str, Classification]:
        return {c.blob_id: c for c in self.classifications}
