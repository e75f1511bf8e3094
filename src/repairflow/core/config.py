"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class PolicySettings(BaseSettings):
    """Reference classification constants for the repair workflow."""

    model_config = {"env_prefix": "REPAIRFLOW_POLICY_"}

    classify_modulus: int = 4
    recover_threshold: int = 1000  # recover succeeds strictly below this
    enqueue_modulus: int = 3
    print_modulus: int = 2


class CheckpointSettings(BaseSettings):
    """Checkpoint granularity and backend selection."""

    model_config = {"env_prefix": "REPAIRFLOW_CHECKPOINT_"}

    granularity: Literal["start_end", "every_step"] = "every_step"
    backend: Literal["memory", "redis", "s3"] = "memory"


class RedisSettings(BaseSettings):
    """Redis checkpoint store configuration."""

    model_config = {"env_prefix": "REPAIRFLOW_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    ttl_seconds: int = 0  # 0 disables expiry


class S3Settings(BaseSettings):
    """S3 checkpoint store configuration."""

    model_config = {"env_prefix": "REPAIRFLOW_S3_"}

    bucket: str = "repairflow-checkpoints"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override
    prefix: str = "checkpoints"


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "REPAIRFLOW_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"

    policy: PolicySettings = PolicySettings()
    checkpoint: CheckpointSettings = CheckpointSettings()
    redis: RedisSettings = RedisSettings()
    s3: S3Settings = S3Settings()
