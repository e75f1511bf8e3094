"""Checkpoint writer — hands encoded orders to a checkpoint store."""

from __future__ import annotations

from repairflow.checkpoint.codec import CheckpointCodec
from repairflow.core.logging_config import get_logger
from repairflow.core.protocols import ICheckpointStore
from repairflow.models.order import RepairOrder

logger = get_logger(__name__)


class CheckpointWriter:
    """Persists orders whose state the codec's granularity selects."""

    def __init__(self, codec: CheckpointCodec, store: ICheckpointStore) -> None:
        self._codec = codec
        self._store = store

    @property
    def codec(self) -> CheckpointCodec:
        return self._codec

    def __call__(self, order: RepairOrder) -> str | None:
        """Checkpoint ``order`` if due. Returns the storage key, or None when skipped."""
        if not self._codec.should_checkpoint(order):
            return None
        key = self._store.store(order.order_number, self._codec.encode(order))
        logger.debug("Stored %s checkpoint at %s", order.label, key, extra={"key": key})
        return key

    def load_latest(self, order_number: int) -> RepairOrder | None:
        data = self._store.latest(order_number)
        if data is None:
            return None
        return self._codec.decode(data)

    def history(self, order_number: int) -> list[RepairOrder]:
        return [self._codec.decode(data) for data in self._store.history(order_number)]
