"""repairflow exception hierarchy.

Branch failures (Invalid, Garbage, Krangled, ...) are states, not
exceptions. Everything raised from here is either a programming error or a
checkpoint that cannot be trusted.
"""

from __future__ import annotations


class RepairFlowError(Exception):
    """Base exception for all repairflow errors."""


class ContractViolation(RepairFlowError):
    """An operation was invoked on an order it is not defined for."""


class IllegalTransitionError(ContractViolation):
    """Transition called on an order in the wrong state."""

    def __init__(self, operation: str, order_number: int, label: str) -> None:
        self.operation = operation
        self.order_number = order_number
        self.label = label
        super().__init__(
            f"{operation}() is not defined for order {order_number} in state {label}"
        )


class TerminalStateError(IllegalTransitionError):
    """Transition called on an order that already reached a terminal state."""


class ConsumedOrderError(ContractViolation):
    """A transition input was reused after it had been consumed."""

    def __init__(self, operation: str, order_number: int) -> None:
        self.operation = operation
        self.order_number = order_number
        super().__init__(
            f"{operation}() received order {order_number} which was already consumed"
        )


class CheckpointError(RepairFlowError):
    """Error while encoding, decoding or storing a checkpoint."""


class CheckpointFormatError(CheckpointError):
    """Checkpoint bytes do not describe a state from the closed set."""


class CheckpointPolicyError(CheckpointError):
    """Checkpoint granularity does not allow this state to be persisted or resumed."""

    def __init__(self, label: str, granularity: str) -> None:
        self.label = label
        self.granularity = granularity
        super().__init__(f"State {label} is not checkpointed under {granularity} granularity")


class CheckpointStoreError(CheckpointError):
    """Checkpoint store backend operation failed."""
