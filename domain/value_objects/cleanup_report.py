from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from domain.value_objects.blob_category import BlobCategory


class RecommendationType(str, Enum):
    IMMEDIATE = "immediate"
    SUGGESTED = "suggested"
    REVIEW = "review"


class RecommendationImpact(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class CleanupRecommendation(BaseModel):
    """A descriptive, prioritized suggestion. Never changes any classification."""

    model_config = ConfigDict(frozen=True)

    type: RecommendationType
    description: str
    impact: RecommendationImpact
    blob_ids: tuple[str, ...]


class CategoryStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int = 0
    size: int = 0
    deletable: int = 0
    deletable_size: int = 0


class CleanupAnalysis(BaseModel):
    """Reporting view over a full classification set."""

    model_config = ConfigDict(frozen=True)

    total_blobs: int
    total_size: int
    categories: dict[BlobCategory, CategoryStats] = Field(default_factory=dict)
    recommendations: tuple[CleanupRecommendation, ...] = ()
