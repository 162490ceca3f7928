from enum import Enum


class BlobImportance(str, Enum):
    """Five-level protection scale, from never-delete to safe-to-delete."""

    CRITICAL = "critical"  # Active website or essential data
    IMPORTANT = "important"  # Referenced or valuable content
    NORMAL = "normal"  # Standard files
    LOW = "low"  # Rarely accessed
    DISPOSABLE = "disposable"  # Safe to delete

    @property
    def rank(self) -> int:
        """Ordinal position, higher means more protected (disposable=0, critical=4)."""
        return _RANKS[self]

    def is_stricter_than(self, other: "BlobImportance") -> bool:
        return self.rank > other.rank


_RANKS = {
    BlobImportance.DISPOSABLE: 0,
    BlobImportance.LOW: 1,
    BlobImportance.NORMAL: 2,
    BlobImportance.IMPORTANT: 3,
    BlobImportance.CRITICAL: 4,
}
