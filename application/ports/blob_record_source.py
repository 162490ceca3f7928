from typing import Protocol

from domain.value_objects.blob_record import BlobRecord


class BlobRecordSource(Protocol):
    """Port for the chain/account enumerator that supplies BlobRecords.

    Implementations are expected to be read-only; the core never queries the chain
    any other way.
    """

    async def list_blobs(self, owner_address: str) -> list[BlobRecord]:
        """Return every blob owned by ``owner_address``."""
        ...

    async def get_blob(self, blob_id: str) -> BlobRecord | None:
        """Return a fresh record for ``blob_id``, or None if it no longer exists."""
        ...
