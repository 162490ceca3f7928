"""Roll up an owner's blobs and their classifications into one summary."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from domain.services.category_classifier import categorize
from domain.value_objects.blob_category import BlobCategory
from domain.value_objects.blob_record import BlobRecord
from domain.value_objects.classification import Classification
from domain.value_objects.inventory_summary import InventorySummary


def summarize_inventory(
    owner_address: str,
    blobs: Iterable[BlobRecord],
    classifications: Mapping[str, Classification] | None = None,
) -> InventorySummary:
    """Summarize an owner's storage.

    Categories come from ``classifications`` when a blob has one, otherwise from its
    declared content type alone. Deletable counts follow the owner's deletable flag,
    i.e. what could be reclaimed at most.
    """
    classifications = classifications or {}
    counts = dict.fromkeys(BlobCategory, 0)
    total_blobs = total_size = total_cost = 0
    deletable_blobs = deletable_size = potential_savings = 0
    websites = expired = 0

    for blob in blobs:
        size = blob.size_bytes or 0
        total_blobs += 1
        total_size += size
        total_cost += blob.storage_rebate_units

        if blob.expired:
            expired += 1
        if blob.deletable_flag:
            deletable_blobs += 1
            deletable_size += size
            potential_savings += blob.storage_rebate_units

        known = classifications.get(blob.id)
        category = known.category if known else categorize(blob.declared_content_type)
        counts[category] += 1
        if category == BlobCategory.WEBSITE:
            websites += 1

    return InventorySummary(
        owner_address=owner_address,
        total_blobs=total_blobs,
        total_size=total_size,
        total_cost=total_cost,
        categories=counts,
        deletable_blobs=deletable_blobs,
        deletable_size=deletable_size,
        potential_savings=potential_savings,
        websites=websites,
        expired_blobs=expired,
    )
