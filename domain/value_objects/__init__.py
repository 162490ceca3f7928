from .blob_category import BlobCategory
from .blob_importance import BlobImportance
from .blob_record import BlobRecord
from .classification import Classification
from .cleanup_report import (
    CategoryStats,
    CleanupAnalysis,
    CleanupRecommendation,
    RecommendationImpact,
    RecommendationType,
)
from .cost_estimate import BatchCostEstimate, CostBatch, CostEstimate
from .deletion_plan import DeletionFilters, DeletionPlan
from .inventory_summary import InventorySummary
from .mime_type import MimeType
from .site_descriptor import SiteDescriptor, SiteResource, SiteStructure

__all__ = [
    "BatchCostEstimate",
    "BlobCategory",
    "BlobImportance",
    "BlobRecord",
    "CategoryStats",
    "Classification",
    "CleanupAnalysis",
    "CleanupRecommendation",
    "CostBatch",
    "CostEstimate",
    "DeletionFilters",
    "DeletionPlan",
    "InventorySummary",
    "MimeType",
    "RecommendationImpact",
    "RecommendationType",
    "SiteDescriptor",
    "SiteResource",
    "SiteStructure",
]
