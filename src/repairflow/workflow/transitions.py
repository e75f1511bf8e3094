"""Transition executor: one method per state-to-state operation.

Each method takes an order in a specific source state, consumes it and
returns the next order. Fallible transitions report failure as a typed
branch (``Err`` or another ``OneOf4`` label), never by raising. Raising is
reserved for contract violations: wrong source state, terminal state, or an
input that was already consumed.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar, Union, overload

from repairflow.core.exceptions import (
    ConsumedOrderError,
    ContractViolation,
    IllegalTransitionError,
    TerminalStateError,
)
from repairflow.core.protocols import IRepairPolicy
from repairflow.models.order import RepairOrder
from repairflow.models.outcomes import A, B, C, D, Err, Ok, OneOf4, Result
from repairflow.models.states import (
    AprilFools,
    BaseState,
    Finished,
    Garbage,
    HighPriority,
    Invalid,
    Krangled,
    LowPriority,
    New,
    Recovered,
    WaitingForPrinter,
    WaitingForWorker,
)
from repairflow.workflow.policy import ReferencePolicy

Fn = TypeVar("Fn", bound=Callable[..., Any])

ValidateOutcome = OneOf4[
    RepairOrder[Invalid],
    RepairOrder[LowPriority],
    RepairOrder[HighPriority],
    RepairOrder[AprilFools],
]


def require_state(order: RepairOrder, operation: str, *allowed: type[BaseState]) -> None:
    """Raise unless ``order`` is unconsumed and in one of ``allowed``."""
    if order.consumed:
        raise ConsumedOrderError(operation, order.order_number)
    if isinstance(order.state, allowed):
        return
    if order.is_terminal:
        raise TerminalStateError(operation, order.order_number, order.label)
    raise IllegalTransitionError(operation, order.order_number, order.label)


def transition(*allowed: type[BaseState]) -> Callable[[Fn], Fn]:
    """Guard a TransitionExecutor method with ``require_state``."""

    def decorator(method: Fn) -> Fn:
        @functools.wraps(method)
        def wrapper(self: TransitionExecutor, order: RepairOrder, *args: Any, **kwargs: Any) -> Any:
            require_state(order, method.__name__, *allowed)
            return method(self, order, *args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


class TransitionExecutor:
    """Applies the repair workflow's transitions under an injected policy."""

    def __init__(self, policy: IRepairPolicy | None = None) -> None:
        self._policy = policy or ReferencePolicy()

    @property
    def policy(self) -> IRepairPolicy:
        return self._policy

    @transition(New)
    def validate(self, order: RepairOrder[New]) -> ValidateOutcome:
        match self._policy.classify(order.order_number):
            case 0:
                errors = self._policy.validation_errors(order.customer)
                return A(order.with_state(Invalid(validation_errors=errors)))
            case 1:
                return B(order.with_state(LowPriority()))
            case 2:
                return C(order.with_state(HighPriority()))
            case 3:
                return D(order.with_state(AprilFools()))
            case other:
                raise ContractViolation(f"Policy returned classification {other!r}, expected 0..3")

    @transition(Invalid)
    def recover(
        self, order: RepairOrder[Invalid]
    ) -> Result[RepairOrder[Recovered], RepairOrder[Krangled]]:
        if self._policy.can_recover(order.order_number):
            return Ok(order.with_state(Recovered()))
        return Err(order.with_state(Krangled()))

    @transition(Recovered)
    def prioritize(self, order: RepairOrder[Recovered]) -> RepairOrder[LowPriority]:
        return order.with_state(LowPriority())

    @overload
    def enqueue(
        self, order: RepairOrder[LowPriority]
    ) -> Result[RepairOrder[WaitingForWorker], RepairOrder[HighPriority]]: ...

    @overload
    def enqueue(self, order: RepairOrder[HighPriority]) -> RepairOrder[WaitingForWorker]: ...

    @transition(LowPriority, HighPriority)
    def enqueue(
        self, order: RepairOrder[LowPriority] | RepairOrder[HighPriority]
    ) -> Union[
        Result[RepairOrder[WaitingForWorker], RepairOrder[HighPriority]],
        RepairOrder[WaitingForWorker],
    ]:
        # High priority orders always get a worker slot; low priority ones
        # escalate when the queue refuses them.
        if isinstance(order.state, HighPriority):
            return order.with_state(WaitingForWorker())
        if self._policy.can_enqueue(order.order_number):
            return Ok(order.with_state(WaitingForWorker()))
        return Err(order.with_state(HighPriority()))

    @transition(WaitingForWorker)
    def send_print_job(
        self, order: RepairOrder[WaitingForWorker]
    ) -> Result[RepairOrder[WaitingForPrinter], RepairOrder[Garbage]]:
        if self._policy.is_print_ready(order.order_number):
            return Ok(order.with_state(WaitingForPrinter()))
        return Err(order.with_state(Garbage()))

    @transition(WaitingForPrinter)
    def finish(self, order: RepairOrder[WaitingForPrinter]) -> RepairOrder[Finished]:
        return order.with_state(Finished())
