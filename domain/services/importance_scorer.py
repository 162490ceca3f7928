"""Assign importance, deletion eligibility and a display subcategory to a blob.

Everything here is a pure computation over already-fetched data. The caller decides
whether content could be fetched (``content_available``) and supplies the site
analysis, references and domain linkage; a fixed ``now`` makes results reproducible.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import NamedTuple

from domain.value_objects.blob_category import BlobCategory
from domain.value_objects.blob_importance import BlobImportance
from domain.value_objects.blob_record import BlobRecord
from domain.value_objects.classification import Classification
from domain.value_objects.site_descriptor import SiteDescriptor

LOW_IMPORTANCE_AGE_DAYS = 365

REASON_EXPIRED = "Blob has expired"
REASON_DISPOSABLE = "Marked as disposable"
REASON_OLD_LOW_IMPORTANCE = "Low importance and older than 1 year"

SUBCATEGORY_LABELS: dict[BlobCategory, tuple[tuple[tuple[str, ...], str], ...]] = {
    BlobCategory.IMAGE: (
        (("png",), "PNG"),
        (("jpeg", "jpg"), "JPEG"),
        (("gif",), "GIF"),
        (("svg",), "SVG"),
        (("webp",), "WebP"),
    ),
    BlobCategory.VIDEO: (
        (("mp4",), "MP4"),
        (("webm",), "WebM"),
        (("avi",), "AVI"),
        (("mov", "quicktime"), "MOV"),
    ),
    BlobCategory.AUDIO: (
        (("mpeg", "mp3"), "MP3"),
        (("ogg",), "OGG"),
        (("wav",), "WAV"),
    ),
    BlobCategory.DOCUMENT: (
        (("pdf",), "PDF"),
        (("word",), "Word"),
        (("text/plain",), "Text"),
        (("markdown",), "Markdown"),
    ),
    BlobCategory.ARCHIVE: (
        (("zip",), "ZIP"),
        (("tar",), "TAR"),
        (("rar",), "RAR"),
    ),
    BlobCategory.CODE: (
        (("json",), "JSON"),
        (("javascript",), "JavaScript"),
        (("xml",), "XML"),
    ),
}


class ImportanceScore(NamedTuple):
    importance: BlobImportance
    deletable: bool
    reason: str | None


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(UTC)


def determine_importance(
    blob: BlobRecord,
    category: BlobCategory,
    site: SiteDescriptor | None,
    referenced_by: frozenset[str],
    *,
    content_available: bool,
    linked_domain: str | None,
    now: datetime,
) -> BlobImportance:
    """First applicable rule wins: expiry, website status, references, then age."""
    if blob.expired:
        return BlobImportance.DISPOSABLE

    if category == BlobCategory.WEBSITE:
        if not content_available:
            # Unreadable, possibly corrupted.
            return BlobImportance.LOW
        if site is not None:
            return BlobImportance.CRITICAL if linked_domain else BlobImportance.IMPORTANT

    if referenced_by:
        return BlobImportance.IMPORTANT

    # Blobs between 180 and 365 days old stay NORMAL, same as younger ones.
    if blob.age_days(now) > LOW_IMPORTANCE_AGE_DAYS:
        return BlobImportance.LOW
    return BlobImportance.NORMAL


def deletion_reason(
    blob: BlobRecord,
    importance: BlobImportance,
    referenced_by: frozenset[str],
    *,
    now: datetime,
) -> str | None:
    """Return why the blob may be deleted, or None if it must be kept.

    The owner's deletable flag is an absolute veto.
    """
    if not blob.deletable_flag:
        return None
    if importance == BlobImportance.CRITICAL:
        return None
    if referenced_by:
        return None
    if blob.expired:
        return REASON_EXPIRED
    if importance == BlobImportance.DISPOSABLE:
        return REASON_DISPOSABLE
    if importance == BlobImportance.LOW and blob.age_days(now) > LOW_IMPORTANCE_AGE_DAYS:
        return REASON_OLD_LOW_IMPORTANCE
    return None


def score(
    blob: BlobRecord,
    category: BlobCategory,
    site: SiteDescriptor | None = None,
    referenced_by: Iterable[str] = (),
    *,
    content_available: bool = True,
    linked_domain: str | None = None,
    now: datetime | None = None,
) -> ImportanceScore:
    """Score a blob's importance and decide whether it may be deleted.

    Args:
        blob: The record being judged
        category: Category from the classifier
        site: Structural analysis result, None when not a site or not analyzed
        referenced_by: Ids of other blobs that embed this one
        content_available: False when the blob's content could not be fetched
        linked_domain: Name-service domain pointing at this site, if any
        now: Reference time for age computation

    Returns:
        ImportanceScore with importance, deletable flag and reason (None unless deletable)

    """
    refs = frozenset(referenced_by)
    current = _now(now)
    importance = determine_importance(
        blob,
        category,
        site,
        refs,
        content_available=content_available,
        linked_domain=linked_domain,
        now=current,
    )
    reason = deletion_reason(blob, importance, refs, now=current)
    return ImportanceScore(importance=importance, deletable=reason is not None, reason=reason)


def derive_subcategory(
    content_type: str | None,
    category: BlobCategory,
    site: SiteDescriptor | None = None,
) -> str | None:
    """Best-effort display label for a blob, e.g. ``PNG`` or ``ZIP Site``."""
    lowered = (content_type or "").lower()
    if category == BlobCategory.WEBSITE:
        if site is not None:
            return "File Directory" if site.is_file_directory else "Website"
        return "ZIP Site" if "zip" in lowered else "HTML Page"
    if not lowered:
        return None
    for needles, label in SUBCATEGORY_LABELS.get(category, ()):
        if any(needle in lowered for needle in needles):
            return label
    return None


def build_classification(
    blob: BlobRecord,
    category: BlobCategory,
    site: SiteDescriptor | None = None,
    referenced_by: Iterable[str] = (),
    *,
    content_type: str | None = None,
    content_available: bool = True,
    linked_domain: str | None = None,
    now: datetime | None = None,
) -> Classification:
    """Assemble the full Classification record for one blob."""
    refs = frozenset(referenced_by)
    result = score(
        blob,
        category,
        site,
        refs,
        content_available=content_available,
        linked_domain=linked_domain,
        now=now,
    )
    return Classification(
        blob_id=blob.id,
        category=category,
        subcategory=derive_subcategory(content_type or blob.declared_content_type, category, site),
        importance=result.importance,
        deletable=result.deletable,
        delete_reason=result.reason,
        referenced_by=refs,
        content_type=content_type or blob.declared_content_type,
        size_bytes=blob.size_bytes or 0,
        storage_cost=blob.storage_rebate_units,
        last_accessed=blob.created_at,
    )
