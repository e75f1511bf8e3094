"""Wire a WorkflowDriver from application settings."""

from __future__ import annotations

from repairflow.checkpoint.codec import CheckpointCodec
from repairflow.checkpoint.writer import CheckpointWriter
from repairflow.core.config import AppSettings
from repairflow.core.logging_config import configure_logging
from repairflow.core.protocols import ICheckpointStore, IRepairPolicy
from repairflow.persistence import create_checkpoint_store
from repairflow.workflow.driver import WorkflowDriver
from repairflow.workflow.policy import ReferencePolicy
from repairflow.workflow.transitions import TransitionExecutor


def create_driver(
    settings: AppSettings | None = None,
    *,
    policy: IRepairPolicy | None = None,
    store: ICheckpointStore | None = None,
) -> WorkflowDriver:
    """Create a driver with logging configured and checkpointing attached.

    ``policy`` and ``store`` override the ones derived from settings.
    """
    if settings is None:
        settings = AppSettings()

    configure_logging(log_level=settings.log_level, environment=settings.environment)

    executor = TransitionExecutor(policy or ReferencePolicy(settings.policy))
    writer = CheckpointWriter(
        CheckpointCodec(settings.checkpoint.granularity),
        store or create_checkpoint_store(settings),
    )
    return WorkflowDriver(executor, checkpointer=writer)
