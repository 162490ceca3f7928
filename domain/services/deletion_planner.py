"""Turn a set of classifications into an executable deletion plan."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from domain.value_objects.blob_category import BlobCategory
from domain.value_objects.blob_importance import BlobImportance
from domain.value_objects.classification import Classification
from domain.value_objects.deletion_plan import DeletionFilters, DeletionPlan

LARGE_BLOB_BYTES = 10 * 1024 * 1024
VOLUME_WARNING_THRESHOLD = 50


def passes_filters(classification: Classification, filters: DeletionFilters) -> bool:
    """Return True if the classification is deletable and satisfies every supplied filter."""
    if not classification.deletable:
        return False

    if filters.exclude_categories and classification.category in filters.exclude_categories:
        return False

    if (
        filters.include_categories is not None
        and classification.category not in filters.include_categories
    ):
        return False

    if filters.max_importance is not None and classification.importance.is_stricter_than(
        filters.max_importance,
    ):
        return False

    if filters.min_size_bytes is not None and classification.size_bytes < filters.min_size_bytes:
        return False

    if filters.max_size_bytes is not None and classification.size_bytes > filters.max_size_bytes:
        return False

    return True


def generate_warnings(
    targets: list[Classification],
    *,
    large_blob_bytes: int = LARGE_BLOB_BYTES,
    volume_threshold: int = VOLUME_WARNING_THRESHOLD,
) -> list[str]:
    """Advisory, non-blocking warnings about what the plan would destroy."""
    warnings: list[str] = []

    websites = sum(1 for c in targets if c.category == BlobCategory.WEBSITE)
    if websites:
        warnings.append(f"{websites} website(s) will be deleted")

    important = sum(1 for c in targets if c.importance == BlobImportance.IMPORTANT)
    if important:
        warnings.append(f"{important} important blob(s) will be deleted")

    large = sum(1 for c in targets if c.size_bytes > large_blob_bytes)
    if large:
        warnings.append(
            f"{large} large blob(s) (>{large_blob_bytes // (1024 * 1024)}MB) will be deleted",
        )

    if len(targets) > volume_threshold:
        warnings.append(f"Large number of blobs to delete ({len(targets)})")

    return warnings


def plan(
    classifications: Iterable[Classification],
    filters: DeletionFilters | None = None,
) -> DeletionPlan:
    """Build a DeletionPlan from classifications.

    Targets keep the input order and are always a subset of the deletable
    classifications. Totals are exact sums over the targets.
    """
    filters = filters or DeletionFilters()
    targets = [c for c in classifications if passes_filters(c, filters)]

    counts = Counter(c.category for c in targets)
    return DeletionPlan(
        targets=tuple(c.blob_id for c in targets),
        total_size_reduction=sum(c.size_bytes for c in targets),
        total_cost_savings=sum(c.storage_cost for c in targets),
        category_counts={category: counts.get(category, 0) for category in BlobCategory},
        warnings=tuple(generate_warnings(targets)),
    )
