"""Pluggable checkpoint stores behind the ICheckpointStore Protocol."""

from __future__ import annotations

from repairflow.core.config import AppSettings
from repairflow.persistence.memory_backend import MemoryCheckpointStore
from repairflow.persistence.protocols import ICheckpointStore
from repairflow.persistence.redis_backend import RedisCheckpointStore
from repairflow.persistence.s3_backend import S3CheckpointStore


def create_checkpoint_store(settings: AppSettings | None = None) -> ICheckpointStore:
    """Create the checkpoint store selected by ``settings.checkpoint.backend``."""
    if settings is None:
        settings = AppSettings()

    backend = settings.checkpoint.backend
    if backend == "redis":
        return RedisCheckpointStore(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
            ttl_seconds=settings.redis.ttl_seconds,
        )
    if backend == "s3":
        return S3CheckpointStore(
            bucket=settings.s3.bucket,
            region=settings.s3.region,
            endpoint_url=settings.s3.endpoint_url,
            prefix=settings.s3.prefix,
        )
    return MemoryCheckpointStore()
