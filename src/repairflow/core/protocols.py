"""Protocol interfaces for every collaborator the workflow core calls into.

All seams use Protocols: structural typing, no inheritance required, easy to
test with isinstance().
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from repairflow.models.order import Customer, Employee


# ---------------------------------------------------------------------------
# Decision policy
# ---------------------------------------------------------------------------

@runtime_checkable
class IRepairPolicy(Protocol):
    """Decision rules behind each fallible transition."""

    def classify(self, order_number: int) -> int: ...

    def validation_errors(self, customer: Customer) -> tuple[str, ...]: ...

    def can_recover(self, order_number: int) -> bool: ...

    def can_enqueue(self, order_number: int) -> bool: ...

    def is_print_ready(self, order_number: int) -> bool: ...


# ---------------------------------------------------------------------------
# Persistence: Checkpoint Store
# ---------------------------------------------------------------------------

@runtime_checkable
class ICheckpointStore(Protocol):
    """Append-only byte sink for checkpoint records, keyed by order number."""

    def store(self, order_number: int, data: bytes) -> str: ...

    def latest(self, order_number: int) -> bytes | None: ...

    def history(self, order_number: int) -> list[bytes]: ...


# ---------------------------------------------------------------------------
# Shop floor
# ---------------------------------------------------------------------------

@runtime_checkable
class ITechnicianPool(Protocol):
    """Source of technicians; None while nobody is idle."""

    def find_idle_technician(self) -> Employee | None: ...


@runtime_checkable
class IWorkPlanner(Protocol):
    """Work-breakdown source for an order."""

    def calculate_steps(self) -> list[str]: ...


@runtime_checkable
class IPaymentGateway(Protocol):
    """Settlement confirmation, opaque to the core."""

    def await_payment(self, invoice: str) -> bool: ...
