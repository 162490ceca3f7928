from __future__ import annotations

import time

import structlog

from application.ports.blob_record_source import BlobRecordSource
from domain.services.chain_object_fields import blob_record_from_chain_object
from domain.value_objects.blob_record import SECONDS_PER_EPOCH, BlobRecord
from infrastructure.chain.json_snapshot import load_json_objects

logger = structlog.get_logger()


def current_epoch_from_clock() -> int:
    return int(time.time()) // SECONDS_PER_EPOCH


class SnapshotBlobRecordSource(BlobRecordSource):
    """BlobRecords from a JSON snapshot of on-chain blob objects.

    The snapshot is a JSON array of objects in any shape understood by
    ``blob_record_from_chain_object`` (e.g. the output of an owned-objects query),
    read through fsspec so it can live locally or in object storage.
    """

    def __init__(
        self,
        url: str,
        *,
        current_epoch: int | None = None,
        storage_options: dict | None = None,
    ) -> None:
        self.url = url
        self.current_epoch = current_epoch
        self.storage_options = storage_options or {}

    async def _records(self) -> list[BlobRecord]:
        objects = await load_json_objects(self.url, self.storage_options)

        epoch = self.current_epoch if self.current_epoch is not None else current_epoch_from_clock()
        records = []
        for obj in objects:
            record = blob_record_from_chain_object(obj, current_epoch=epoch)
            if record is not None:
                records.append(record)
        logger.debug(
            "chain_snapshot_loaded",
            url=self.url,
            objects=len(objects),
            blobs=len(records),
        )
        return records

    async def list_blobs(self, owner_address: str) -> list[BlobRecord]:
        return [r for r in await self._records() if r.owner_address == owner_address]

    async def get_blob(self, blob_id: str) -> BlobRecord | None:
        wanted = blob_id.lower()
        return next((r for r in await self._records() if r.id.lower() == wanted), None)
