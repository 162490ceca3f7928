import re
from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator

BLOB_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")

SECONDS_PER_EPOCH = 24 * 60 * 60
UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

_MICROSECONDS_PER_SECOND = 1_000_000
_ONE_MICROSECOND = timedelta(microseconds=1)


class BlobRecord(BaseModel):
    """Identity and metadata for one storage object, as enumerated from an owner's account.

    Records are produced by the chain/account enumerator and are read-only inside the
    classification core. Nothing here is persisted; each invocation recomputes from
    fresh records.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Content identifier (64 hex digits)")
    size_bytes: int | None = Field(None, ge=0, description="Size reported by the network")
    declared_content_type: str | None = Field(
        None,
        description="MIME type supplied by the network, authoritative unless the fallback",
    )
    expired: bool = Field(False, description="True once the storage lease has elapsed")
    deletable_flag: bool = Field(
        False,
        description="Creation-time owner authorization; without it the blob is never deleted",
    )
    owner_address: str | None = Field(None, description="Owning account address")
    storage_object_id: str | None = Field(None, description="On-chain storage object id")
    created_epoch: int | None = Field(None, ge=0, description="Network epoch of creation")
    storage_rebate_units: int = Field(
        0,
        ge=0,
        description="Refundable cost units (MIST) recovered on deletion",
    )

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Ensure the blob id is a fixed-length hex string."""
        if not BLOB_ID_PATTERN.match(v):
            msg = f"Blob id must be 64 hex digits, got {v!r}"
            raise ValueError(msg)
        return v

    @property
    def created_at(self) -> datetime | None:
        """Wall-clock date of the creation epoch (one epoch is one day).

        None when the epoch is unknown or lies beyond the range ``datetime`` can represent.
        """
        if self.created_epoch is None:
            return None
        try:
            return UNIX_EPOCH + timedelta(seconds=self.created_epoch * SECONDS_PER_EPOCH)
        except OverflowError:
            return None

    def age_days(self, now: datetime) -> int:
        """Whole days between creation and ``now``, rounded up; 0 when the epoch is unknown.

        Integer microsecond arithmetic, defined for every epoch value.
        """
        if self.created_epoch is None:
            return 0
        now_us = (now - UNIX_EPOCH) // _ONE_MICROSECOND
        created_us = self.created_epoch * SECONDS_PER_EPOCH * _MICROSECONDS_PER_SECOND
        elapsed_us = abs(now_us - created_us)
        return -(-elapsed_us // (SECONDS_PER_EPOCH * _MICROSECONDS_PER_SECOND))
