from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

import structlog

from application.ports.domain_link_resolver import DomainLinkResolver
from domain.services.chain_object_fields import extract_domain_name, extract_target_site
from infrastructure.chain.json_snapshot import load_json_objects

if TYPE_CHECKING:
    from domain.value_objects.blob_record import BlobRecord

logger = structlog.get_logger()


class NameRecordDomainResolver(DomainLinkResolver):
    """Resolve linked domains from name-service records already fetched from the chain.

    Records map a domain to a target (site object id or blob id); a blob is linked
    when either its storage object id or its blob id is a target.
    """

    def __init__(self, targets: Mapping[str, str] | None = None) -> None:
        self._targets = {k.lower(): v for k, v in (targets or {}).items()}

    @classmethod
    def from_name_records(cls, records: Iterable[Any]) -> NameRecordDomainResolver:
        """Build from raw on-chain name records; records without a name or target are ignored."""
        targets: dict[str, str] = {}
        skipped = 0
        for record in records:
            domain = extract_domain_name(record)
            target = extract_target_site(record)
            if domain is None or target is None:
                skipped += 1
                continue
            targets.setdefault(target, domain)
        if skipped:
            logger.debug("name_records_skipped", count=skipped)
        return cls(targets)

    async def linked_domain(self, blob: BlobRecord) -> str | None:
        for key in (blob.storage_object_id, blob.id):
            if key and key.lower() in self._targets:
                return self._targets[key.lower()]
        return None


class SnapshotNameRecordDomainResolver(DomainLinkResolver):
    """Domain linkage from a JSON snapshot of name-service records, read through fsspec.

    The snapshot is loaded on first lookup and kept for the resolver's lifetime. A
    snapshot that cannot be loaded raises InfrastructureError on every lookup until a
    load succeeds.
    """

    def __init__(self, url: str, *, storage_options: dict | None = None) -> None:
        self.url = url
        self.storage_options = storage_options or {}
        self._resolver: NameRecordDomainResolver | None = None
        self._lock = asyncio.Lock()

    async def _loaded(self) -> NameRecordDomainResolver:
        async with self._lock:
            if self._resolver is None:
                records = await load_json_objects(self.url, self.storage_options)
                self._resolver = NameRecordDomainResolver.from_name_records(records)
                logger.info("name_records_loaded", url=self.url, records=len(records))
        return self._resolver

    async def linked_domain(self, blob: BlobRecord) -> str | None:
        resolver = await self._loaded()
        return await resolver.linked_domain(blob)
