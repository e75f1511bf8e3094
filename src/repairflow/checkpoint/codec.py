"""Checkpoint codec — one labeled-union wire format, two granularities.

Wire record (UTF-8 JSON)::

    {
      "order_number": 4,
      "damage_description": "dented door",
      "vehicle": "VW Golf",
      "customer": {"has_outstanding_debt": false, "is_banned": false},
      "state": {"label": "Invalid", "validation_errors": ["..."]}
    }

``state.label`` selects the payload schema from the closed state catalog.
Unknown labels, missing payload fields and extra fields anywhere in the
record are format errors. So is a value of the wrong JSON type: decoding is
strict, ``"4"`` is not an order number and ``0`` is not a customer flag.
Decoding never produces a partial or defaulted order.

Granularity decides *which* states are checkpointed, not how they are
encoded:

- ``START_END``: only the inbound New order and the outbound terminal order.
  An interrupted workflow restarts from New, so decoding an intermediate
  state is refused.
- ``EVERY_STEP``: every state, so any checkpoint can be resumed.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import ValidationError

from repairflow.core.exceptions import CheckpointFormatError, CheckpointPolicyError
from repairflow.models.order import OrderRecord, RepairOrder
from repairflow.models.states import INITIAL_LABEL, TERMINAL_LABELS


class Granularity(StrEnum):
    START_END = "start_end"
    EVERY_STEP = "every_step"


class CheckpointCodec:
    """Encodes orders to checkpoint bytes and back."""

    def __init__(self, granularity: Granularity | str = Granularity.EVERY_STEP) -> None:
        self._granularity = Granularity(granularity)

    @property
    def granularity(self) -> Granularity:
        return self._granularity

    def should_checkpoint(self, order: RepairOrder) -> bool:
        if self._granularity is Granularity.EVERY_STEP:
            return True
        return order.label == INITIAL_LABEL or order.label in TERMINAL_LABELS

    def encode(self, order: RepairOrder) -> bytes:
        """Serialize ``order`` into a self-describing checkpoint record."""
        if not self.should_checkpoint(order):
            raise CheckpointPolicyError(order.label, self._granularity)
        return OrderRecord.from_order(order).model_dump_json().encode("utf-8")

    def decode(self, data: bytes | str) -> RepairOrder:
        """Parse checkpoint bytes back into an order in its recorded state."""
        try:
            record = OrderRecord.model_validate_json(data, strict=True)
        except ValidationError as exc:
            raise CheckpointFormatError(f"Invalid checkpoint record: {exc}") from exc

        order = record.to_order()
        if not self.should_checkpoint(order):
            raise CheckpointPolicyError(order.label, self._granularity)
        return order
