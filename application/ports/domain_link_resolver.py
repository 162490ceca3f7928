from typing import Protocol

from domain.value_objects.blob_record import BlobRecord


class DomainLinkResolver(Protocol):
    """Port for name-service lookups: which domain, if any, points at a site blob."""

    async def linked_domain(self, blob: BlobRecord) -> str | None: ...
