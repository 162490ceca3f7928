from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.value_objects.blob_category import BlobCategory
from domain.value_objects.blob_importance import BlobImportance


class DeletionFilters(BaseModel):
    """Caller-supplied narrowing of a deletion plan. All filters are optional and AND-combined."""

    model_config = ConfigDict(frozen=True)

    include_categories: frozenset[BlobCategory] | None = None
    exclude_categories: frozenset[BlobCategory] | None = None
    max_importance: BlobImportance | None = Field(
        None,
        description="Nothing stricter than this level is included",
    )
    min_size_bytes: int | None = Field(None, ge=0)
    max_size_bytes: int | None = Field(None, ge=0)

    @model_validator(mode="after")
    def validate_size_range(self) -> "DeletionFilters":
        if (
            self.min_size_bytes is not None
            and self.max_size_bytes is not None
            and self.min_size_bytes > self.max_size_bytes
        ):
            msg = "min_size_bytes must not exceed max_size_bytes"
            raise ValueError(msg)
        return self


class DeletionPlan(BaseModel):
    """Executable aggregate over many classifications.

    Immutable once returned. The targets are consumed by an external deletion
    executor; the plan itself never touches storage.
    """

    model_config = ConfigDict(frozen=True)

    targets: tuple[str, ...] = ()
    total_size_reduction: int = 0
    total_cost_savings: int = 0
    category_counts: dict[BlobCategory, int] = Field(default_factory=dict)
    warnings: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.targets
