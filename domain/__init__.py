"""Domain layer exports."""

from domain.exceptions import (
    ContentUnavailableError,
    DomainError,
    InfrastructureError,
    ValidationError,
)
from domain.value_objects import (
    BlobCategory,
    BlobImportance,
    BlobRecord,
    Classification,
    DeletionFilters,
    DeletionPlan,
    MimeType,
    SiteDescriptor,
    SiteResource,
)

__all__ = [
    "BlobCategory",
    "BlobImportance",
    "BlobRecord",
    "Classification",
    "ContentUnavailableError",
    "DeletionFilters",
    "DeletionPlan",
    "DomainError",
    "InfrastructureError",
    "MimeType",
    "SiteDescriptor",
    "SiteResource",
    "ValidationError",
]
