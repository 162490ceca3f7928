from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[1] / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="BlobSteward", validation_alias="APP_NAME")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        validation_alias="APP_ENV",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_dir: Path = Field(
        default=Path(__file__).resolve().parents[1] / "logs",
        validation_alias="LOG_DIR",
    )

    # Storage network (aggregator or any fsspec URL holding one file per blob id)
    storage_base_url: str = Field(
        default="https://aggregator.walrus.space/v1/blobs",
        validation_alias="STORAGE_BASE_URL",
    )
    storage_options: dict = {}

    # On-chain object snapshot consumed by the blob record source
    chain_snapshot_url: str | None = Field(default=None, validation_alias="CHAIN_SNAPSHOT_URL")
    current_epoch: int | None = Field(
        default=None,
        validation_alias="CURRENT_EPOCH",
        description="Network epoch used for expiry; defaults to days since the Unix epoch.",
    )
    name_records_url: str | None = Field(
        default=None,
        validation_alias="NAME_RECORDS_URL",
        description="JSON snapshot of name-service records linking domains to sites.",
    )

    # Classification
    classify_max_concurrency: int = Field(
        default=8,
        ge=1,
        validation_alias="CLASSIFY_MAX_CONCURRENCY",
    )
    content_fetch_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias="CONTENT_FETCH_TIMEOUT_SECONDS",
    )
    sniff_prefix_bytes: int = Field(default=1024, ge=16, validation_alias="SNIFF_PREFIX_BYTES")
    max_index_read_bytes: int = Field(
        default=1024 * 1024,
        ge=1,
        validation_alias="MAX_INDEX_READ_BYTES",
        description="Upper bound on bytes decompressed from index.html / _headers entries.",
    )

    # Refund estimation
    gas_per_deletion: float = Field(
        default=0.005,
        ge=0,
        validation_alias="GAS_PER_DELETION",
        description="Estimated SUI spent per deletion transaction.",
    )
    deletion_batch_size: int = Field(default=10, ge=1, validation_alias="DELETION_BATCH_SIZE")


# Global settings instance
settings = Settings()
