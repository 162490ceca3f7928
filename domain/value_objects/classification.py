from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.value_objects.blob_category import BlobCategory
from domain.value_objects.blob_importance import BlobImportance


class Classification(BaseModel):
    """The judgment for one BlobRecord: what it is, how much it matters, whether it can go.

    Invariants:
        - ``deletable`` implies importance is not CRITICAL and nothing references the blob.
        - ``delete_reason`` is present exactly when ``deletable`` is true.
    """

    model_config = ConfigDict(frozen=True)

    blob_id: str
    category: BlobCategory
    subcategory: str | None = None
    importance: BlobImportance
    deletable: bool = False
    delete_reason: str | None = None
    referenced_by: frozenset[str] = Field(default_factory=frozenset)
    content_type: str | None = Field(
        None,
        description="Declared type when authoritative, otherwise the sniffed type",
    )
    size_bytes: int = Field(0, ge=0)
    storage_cost: int = Field(0, ge=0, description="Storage rebate units (MIST)")
    last_accessed: datetime | None = None

    @model_validator(mode="after")
    def validate_deletion_invariants(self) -> "Classification":
        if self.deletable and self.importance == BlobImportance.CRITICAL:
            msg = "A critical blob cannot be deletable"
            raise ValueError(msg)
        if self.deletable and self.referenced_by:
            msg = "A referenced blob cannot be deletable"
            raise ValueError(msg)
        if self.deletable != (self.delete_reason is not None):
            msg = "delete_reason must be set if and only if the blob is deletable"
            raise ValueError(msg)
        return self
