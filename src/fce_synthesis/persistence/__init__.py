"""Pluggable stores backing the Record Store Adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fce_synthesis.persistence.blob_store import FileBlobStore, MemoryBlobStore
from fce_synthesis.persistence.file_backend import FileRecordStore
from fce_synthesis.persistence.memory_backend import MemoryRecordStore
from fce_synthesis.persistence.protocols import IBlobStore, IProfileStore, IRecordStore

if TYPE_CHECKING:
    from fce_synthesis.core.config import ProfileConfig, StoreConfig

__all__ = [
    "IRecordStore",
    "IBlobStore",
    "IProfileStore",
    "FileRecordStore",
    "MemoryRecordStore",
    "FileBlobStore",
    "MemoryBlobStore",
    "build_record_store",
    "build_profile_store",
]


def build_record_store(config: StoreConfig, evaluation_id: str = "") -> IRecordStore:
    """Create the record store selected by ``config.backend``."""
    if config.backend == "memory":
        return MemoryRecordStore()
    if config.backend == "s3":
        from fce_synthesis.persistence.s3_backend import S3RecordStore

        return S3RecordStore(
            bucket=config.s3_bucket,
            prefix=config.s3_prefix,
            region=config.aws_region,
            evaluation_id=evaluation_id,
        )
    path = config.store_path / evaluation_id if evaluation_id else config.store_path
    return FileRecordStore(path)


def build_profile_store(config: ProfileConfig) -> IProfileStore | None:
    """Create the remote profile store, or None when disabled."""
    if not config.enabled:
        return None
    from fce_synthesis.persistence.dynamodb_profile_store import DynamoDBProfileStore

    return DynamoDBProfileStore(
        table_name=config.table_name,
        aws_region=config.aws_region,
        cache_ttl_seconds=config.cache_ttl_seconds,
        cache_max_size=config.cache_max_size,
    )
