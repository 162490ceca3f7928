"""Prioritized cleanup recommendations for reporting. Never used to execute deletions."""

from __future__ import annotations

from collections.abc import Sequence

from domain.value_objects.blob_category import BlobCategory
from domain.value_objects.blob_importance import BlobImportance
from domain.value_objects.classification import Classification
from domain.value_objects.cleanup_report import (
    CategoryStats,
    CleanupAnalysis,
    CleanupRecommendation,
    RecommendationImpact,
    RecommendationType,
)

REVIEW_SIZE_BYTES = 50 * 1024 * 1024


def _reason_mentions(classification: Classification, fragment: str) -> bool:
    return fragment.lower() in (classification.delete_reason or "").lower()


def recommend(
    classifications: Sequence[Classification],
    *,
    review_size_bytes: int = REVIEW_SIZE_BYTES,
) -> list[CleanupRecommendation]:
    """Generate the immediate / suggested / review recommendations, each independently."""
    recommendations: list[CleanupRecommendation] = []

    expired = [c for c in classifications if _reason_mentions(c, "expired")]
    if expired:
        recommendations.append(
            CleanupRecommendation(
                type=RecommendationType.IMMEDIATE,
                description=f"Delete {len(expired)} expired blob(s)",
                impact=RecommendationImpact.HIGH,
                blob_ids=tuple(c.blob_id for c in expired),
            ),
        )

    old_low = [
        c
        for c in classifications
        if c.importance == BlobImportance.LOW and _reason_mentions(c, "older than 1 year")
    ]
    if old_low:
        recommendations.append(
            CleanupRecommendation(
                type=RecommendationType.SUGGESTED,
                description=f"Consider deleting {len(old_low)} old, low-importance blob(s)",
                impact=RecommendationImpact.MEDIUM,
                blob_ids=tuple(c.blob_id for c in old_low),
            ),
        )

    large = [
        c
        for c in classifications
        if c.size_bytes > review_size_bytes
        and c.category != BlobCategory.WEBSITE
        and c.importance != BlobImportance.CRITICAL
    ]
    if large:
        recommendations.append(
            CleanupRecommendation(
                type=RecommendationType.REVIEW,
                description=(
                    f"Review {len(large)} large file(s) "
                    f"(>{review_size_bytes // (1024 * 1024)}MB) for potential deletion"
                ),
                impact=RecommendationImpact.HIGH,
                blob_ids=tuple(c.blob_id for c in large),
            ),
        )

    return recommendations


def analyze_cleanup(classifications: Sequence[Classification]) -> CleanupAnalysis:
    """Totals, per-category statistics and recommendations for a classification set."""
    categories: dict[BlobCategory, CategoryStats] = {}
    for category in BlobCategory:
        members = [c for c in classifications if c.category == category]
        deletable = [c for c in members if c.deletable]
        categories[category] = CategoryStats(
            count=len(members),
            size=sum(c.size_bytes for c in members),
            deletable=len(deletable),
            deletable_size=sum(c.size_bytes for c in deletable),
        )

    return CleanupAnalysis(
        total_blobs=len(classifications),
        total_size=sum(c.size_bytes for c in classifications),
        categories=categories,
        recommendations=tuple(recommend(classifications)),
    )
