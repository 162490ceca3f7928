"""Tests for the deletion planner."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from domain.services.deletion_planner import passes_filters, plan
from domain.value_objects.blob_category import BlobCategory
from domain.value_objects.blob_importance import BlobImportance
from domain.value_objects.deletion_plan import DeletionFilters
from tests.factories import MIB, blob_id, make_classification


class TestPlanTargets:
    """Test target selection and totals."""

    def test_only_deletable_classifications_are_targets(self) -> None:
        """Test that targets are exactly the deletable inputs, in input order."""
        classifications = [
            make_classification(1),
            make_classification(2, deletable=False, importance=BlobImportance.NORMAL),
            make_classification(3, importance=BlobImportance.DISPOSABLE),
            make_classification(4, deletable=False, importance=BlobImportance.CRITICAL),
        ]

        result = plan(classifications)

        assert result.targets == (blob_id(1), blob_id(3))

    def test_totals_are_exact_sums(self) -> None:
        """Test that size and cost totals sum over the targets only."""
        classifications = [
            make_classification(1, size_bytes=100, storage_cost=7),
            make_classification(2, size_bytes=250, storage_cost=11),
            make_classification(3, deletable=False, size_bytes=10_000, storage_cost=999),
        ]

        result = plan(classifications)

        assert result.total_size_reduction == 350
        assert result.total_cost_savings == 18

    def test_category_counts_cover_every_category(self) -> None:
        """Test that counts are reported for all categories, zero when absent."""
        classifications = [
            make_classification(1, category=BlobCategory.IMAGE),
            make_classification(2, category=BlobCategory.IMAGE),
            make_classification(3, category=BlobCategory.VIDEO),
        ]

        result = plan(classifications)

        assert set(result.category_counts) == set(BlobCategory)
        assert result.category_counts[BlobCategory.IMAGE] == 2
        assert result.category_counts[BlobCategory.VIDEO] == 1
        assert result.category_counts[BlobCategory.ARCHIVE] == 0

    def test_empty_input(self) -> None:
        """Test that no classifications yields an empty plan with no warnings."""
        result = plan([])

        assert result.is_empty
        assert result.total_size_reduction == 0
        assert result.warnings == ()

    def test_planning_is_deterministic(self) -> None:
        """Test that planning the same input twice yields equal plans."""
        classifications = [make_classification(n, size_bytes=n * 10) for n in range(1, 6)]

        assert plan(classifications) == plan(classifications)


class TestFilters:
    """Test the AND-combined filter set."""

    @pytest.fixture
    def mixed(self):
        return [
            make_classification(1, category=BlobCategory.IMAGE, size_bytes=10),
            make_classification(2, category=BlobCategory.VIDEO, size_bytes=5 * MIB),
            make_classification(
                3,
                category=BlobCategory.WEBSITE,
                importance=BlobImportance.IMPORTANT,
                size_bytes=1000,
            ),
            make_classification(
                4,
                category=BlobCategory.DOCUMENT,
                importance=BlobImportance.DISPOSABLE,
                size_bytes=0,
            ),
        ]

    def test_include_categories(self, mixed) -> None:
        """Test that include-only keeps just the listed categories."""
        filters = DeletionFilters(include_categories={BlobCategory.IMAGE, BlobCategory.VIDEO})

        assert plan(mixed, filters).targets == (blob_id(1), blob_id(2))

    def test_exclude_categories(self, mixed) -> None:
        """Test that excluded categories are dropped."""
        filters = DeletionFilters(exclude_categories={BlobCategory.WEBSITE})

        assert blob_id(3) not in plan(mixed, filters).targets

    def test_max_importance(self, mixed) -> None:
        """Test that nothing stricter than the maximum importance is planned."""
        filters = DeletionFilters(max_importance=BlobImportance.LOW)

        assert plan(mixed, filters).targets == (blob_id(1), blob_id(2), blob_id(4))

    def test_size_bounds(self, mixed) -> None:
        """Test inclusive minimum and maximum size bounds."""
        filters = DeletionFilters(min_size_bytes=10, max_size_bytes=1000)

        assert plan(mixed, filters).targets == (blob_id(1), blob_id(3))

    def test_zero_bounds_are_honoured(self, mixed) -> None:
        """Test that a zero maximum size is a real filter, not an absent one."""
        filters = DeletionFilters(max_size_bytes=0)

        assert plan(mixed, filters).targets == (blob_id(4),)

    def test_filters_combine(self, mixed) -> None:
        """Test that every supplied filter must pass."""
        filters = DeletionFilters(
            exclude_categories={BlobCategory.DOCUMENT},
            max_importance=BlobImportance.NORMAL,
            max_size_bytes=MIB,
        )

        assert plan(mixed, filters).targets == (blob_id(1),)

    def test_non_deletable_never_passes(self) -> None:
        """Test that filters cannot widen the deletable set."""
        kept = make_classification(1, deletable=False, importance=BlobImportance.NORMAL)

        assert passes_filters(kept, DeletionFilters()) is False

    def test_inverted_size_range_rejected(self) -> None:
        """Test that min above max is a validation error."""
        with pytest.raises(ValidationError):
            DeletionFilters(min_size_bytes=10, max_size_bytes=5)


class TestWarnings:
    """Test advisory warnings."""

    def test_volume_only(self) -> None:
        """Test that sixty ordinary deletable blobs trigger only the volume warning."""
        classifications = [make_classification(n) for n in range(1, 61)]

        result = plan(classifications)

        assert len(result.targets) == 60
        assert result.warnings == ("Large number of blobs to delete (60)",)

    def test_fifty_is_not_over_threshold(self) -> None:
        """Test that exactly fifty targets do not warn."""
        result = plan([make_classification(n) for n in range(1, 51)])

        assert result.warnings == ()

    def test_website_important_and_large(self) -> None:
        """Test that each kind of risky target is counted independently."""
        classifications = [
            make_classification(1, category=BlobCategory.WEBSITE),
            make_classification(
                2,
                category=BlobCategory.WEBSITE,
                importance=BlobImportance.IMPORTANT,
            ),
            make_classification(3, size_bytes=11 * MIB),
            make_classification(4, size_bytes=10 * MIB),
        ]

        result = plan(classifications)

        assert result.warnings == (
            "2 website(s) will be deleted",
            "1 important blob(s) will be deleted",
            "1 large blob(s) (>10MB) will be deleted",
        )

    def test_warnings_only_consider_targets(self) -> None:
        """Test that filtered-out blobs do not produce warnings."""
        classifications = [
            make_classification(1, category=BlobCategory.WEBSITE, size_bytes=20 * MIB),
            make_classification(2),
        ]
        filters = DeletionFilters(exclude_categories={BlobCategory.WEBSITE})

        assert plan(classifications, filters).warnings == ()
