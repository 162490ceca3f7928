from __future__ import annotations

from lagom import Container

from application.ports.blob_content_reader import BlobContentReader
from application.ports.blob_record_source import BlobRecordSource
from application.ports.domain_link_resolver import DomainLinkResolver
from application.ports.reference_index import ReferenceIndex, ReferenceIndexBuilder
from application.use_cases.classification_use_cases import (
    ClassifyBlobsUseCase,
    ClassifyBlobUseCase,
)
from application.use_cases.cost_use_cases import EstimateDeletionRefundUseCase
from application.use_cases.deletion_use_cases import (
    AnalyzeCleanupUseCase,
    CreateDeletionPlanUseCase,
)
from application.use_cases.inventory_use_cases import SummarizeInventoryUseCase
from infrastructure.chain.name_record_domain_resolver import (
    NameRecordDomainResolver,
    SnapshotNameRecordDomainResolver,
)
from infrastructure.chain.snapshot_blob_record_source import SnapshotBlobRecordSource
from infrastructure.config import Settings, settings as default_settings
from infrastructure.references.content_scan_reference_index import ContentScanReferenceIndex
from infrastructure.storage.fsspec_blob_reader import FsspecBlobReader


def create_container(settings: Settings = default_settings) -> Container:
    container = Container()

    # Infrastructure - storage network
    content_reader = FsspecBlobReader(
        settings.storage_base_url,
        storage_options=settings.storage_options,
    )
    container[BlobContentReader] = content_reader

    # Infrastructure - references and name service
    # One shared index: rebuilt by every batch classification, read by single lookups.
    reference_index = ContentScanReferenceIndex(
        content_reader,
        max_concurrency=settings.classify_max_concurrency,
        fetch_timeout_seconds=settings.content_fetch_timeout_seconds,
    )
    container[ContentScanReferenceIndex] = reference_index
    container[ReferenceIndex] = reference_index
    container[ReferenceIndexBuilder] = reference_index
    if settings.name_records_url:
        container[DomainLinkResolver] = SnapshotNameRecordDomainResolver(
            settings.name_records_url,
            storage_options=settings.storage_options,
        )
    else:
        container[DomainLinkResolver] = NameRecordDomainResolver()

    # Infrastructure - chain enumeration
    if settings.chain_snapshot_url:
        container[BlobRecordSource] = SnapshotBlobRecordSource(
            settings.chain_snapshot_url,
            current_epoch=settings.current_epoch,
            storage_options=settings.storage_options,
        )

    # Register Use Cases
    # Classification
    container[ClassifyBlobUseCase] = lambda c: ClassifyBlobUseCase(
        c[BlobContentReader],
        c[ReferenceIndex],
        c[DomainLinkResolver],
        fetch_timeout_seconds=settings.content_fetch_timeout_seconds,
        sniff_prefix_bytes=settings.sniff_prefix_bytes,
        max_entry_read_bytes=settings.max_index_read_bytes,
    )
    container[ClassifyBlobsUseCase] = lambda c: ClassifyBlobsUseCase(
        c[ClassifyBlobUseCase],
        max_concurrency=settings.classify_max_concurrency,
        reference_index_builder=c[ReferenceIndexBuilder],
    )

    # Planning and reporting
    container[CreateDeletionPlanUseCase] = lambda c: CreateDeletionPlanUseCase(
        c[ClassifyBlobsUseCase],
    )
    container[AnalyzeCleanupUseCase] = lambda c: AnalyzeCleanupUseCase(c[ClassifyBlobsUseCase])
    container[EstimateDeletionRefundUseCase] = lambda _: EstimateDeletionRefundUseCase(
        gas_per_deletion=settings.gas_per_deletion,
        batch_size=settings.deletion_batch_size,
    )
    if settings.chain_snapshot_url:
        container[SummarizeInventoryUseCase] = lambda c: SummarizeInventoryUseCase(
            c[BlobRecordSource],
            c[ClassifyBlobsUseCase],
        )

    return container
