"""Workflow driver — walks a repair order from New to a terminal state.

Two call shapes are provided and must agree on the terminal state:

- ``process()`` dispatches explicitly on every branch with ``match``, one
  helper per non-terminal state. Re-entry (recovery, escalation) is a call
  into the helper for the state being re-entered.
- ``process_fluent()`` chains the same transitions through ``Result`` and
  only distinguishes Finished from every other terminal.

``resume()`` re-enters the graph from any non-terminal state, typically an
order decoded from an every-step checkpoint.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar, assert_never

from repairflow.core.exceptions import IllegalTransitionError
from repairflow.core.logging_config import get_logger, order_number_var
from repairflow.models.order import RepairOrder
from repairflow.models.outcomes import A, B, C, D, Err, Ok, OneOf4, Result, dispatch
from repairflow.models.states import (
    AprilFools,
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
from repairflow.workflow.transitions import TransitionExecutor, require_state

logger = get_logger(__name__)

T = TypeVar("T")

EndState = OneOf4[
    RepairOrder[Finished],
    RepairOrder[AprilFools],
    RepairOrder[Garbage],
    RepairOrder[Krangled],
]

Checkpointer = Callable[[RepairOrder], Any]


def unwrap_end_state(end: EndState) -> RepairOrder:
    """Return the terminal order whichever label carries it."""
    return dispatch(end, a=_identity, b=_identity, c=_identity, d=_identity)


def _identity(order: RepairOrder) -> RepairOrder:
    return order


def _produced(outcome: Any) -> RepairOrder:
    if isinstance(outcome, (A, B, C, D, Ok, Err)):
        return outcome.value
    return outcome


class WorkflowDriver:
    """Drives orders through a TransitionExecutor, checkpointing as it goes."""

    def __init__(
        self,
        executor: TransitionExecutor | None = None,
        checkpointer: Checkpointer | None = None,
    ) -> None:
        self._executor = executor or TransitionExecutor()
        self._checkpointer = checkpointer

    # ---- entry points ----

    def process(self, order: RepairOrder[New]) -> EndState:
        """Drive a New order to its terminal state by explicit dispatch."""
        require_state(order, "process", New)
        with self._bound(order):
            self._checkpoint(order)
            return self._from_new(order)

    def process_fluent(
        self, order: RepairOrder[New]
    ) -> Result[RepairOrder[Finished], RepairOrder]:
        """Drive a New order linearly; Ok carries Finished, Err any other terminal."""
        require_state(order, "process_fluent", New)
        with self._bound(order):
            self._checkpoint(order)
            result = (
                self._classify(order)
                .and_then(self._obtain_worker)
                .and_then(lambda waiting: self._advance(self._executor.send_print_job, waiting))
                .map(lambda printing: self._advance(self._executor.finish, printing))
            )
            logger.info("Order reached %s", _produced(result).label)
            return result

    def resume(self, order: RepairOrder) -> EndState:
        """Continue driving an order from whatever non-terminal state it is in."""
        require_state(
            order,
            "resume",
            New,
            Invalid,
            Recovered,
            LowPriority,
            HighPriority,
            WaitingForWorker,
            WaitingForPrinter,
        )
        with self._bound(order):
            logger.info("Resuming from %s", order.label)
            match order.state:
                case New():
                    return self._from_new(order)
                case Invalid():
                    return self._from_invalid(order)
                case Recovered():
                    return self._from_recovered(order)
                case LowPriority():
                    return self._from_low_priority(order)
                case HighPriority():
                    return self._from_high_priority(order)
                case WaitingForWorker():
                    return self._from_waiting_for_worker(order)
                case WaitingForPrinter():
                    return self._from_waiting_for_printer(order)
                case _:
                    raise IllegalTransitionError("resume", order.order_number, order.label)

    # ---- explicit dispatch, one helper per state ----

    def _from_new(self, order: RepairOrder[New]) -> EndState:
        match self._advance(self._executor.validate, order):
            case A(value=invalid):
                return self._from_invalid(invalid)
            case B(value=low):
                return self._from_low_priority(low)
            case C(value=high):
                return self._from_high_priority(high)
            case D(value=april_fools):
                return self._end(B(april_fools))
            case unreachable:
                assert_never(unreachable)

    def _from_invalid(self, order: RepairOrder[Invalid]) -> EndState:
        match self._advance(self._executor.recover, order):
            case Ok(value=recovered):
                return self._from_recovered(recovered)
            case Err(value=krangled):
                return self._end(D(krangled))
            case unreachable:
                assert_never(unreachable)

    def _from_recovered(self, order: RepairOrder[Recovered]) -> EndState:
        return self._from_low_priority(self._advance(self._executor.prioritize, order))

    def _from_low_priority(self, order: RepairOrder[LowPriority]) -> EndState:
        match self._advance(self._executor.enqueue, order):
            case Ok(value=waiting):
                return self._from_waiting_for_worker(waiting)
            case Err(value=escalated):
                logger.debug("Escalating to HighPriority")
                return self._from_high_priority(escalated)
            case unreachable:
                assert_never(unreachable)

    def _from_high_priority(self, order: RepairOrder[HighPriority]) -> EndState:
        return self._from_waiting_for_worker(self._advance(self._executor.enqueue, order))

    def _from_waiting_for_worker(self, order: RepairOrder[WaitingForWorker]) -> EndState:
        match self._advance(self._executor.send_print_job, order):
            case Ok(value=printing):
                return self._from_waiting_for_printer(printing)
            case Err(value=garbage):
                return self._end(C(garbage))
            case unreachable:
                assert_never(unreachable)

    def _from_waiting_for_printer(self, order: RepairOrder[WaitingForPrinter]) -> EndState:
        return self._end(A(self._advance(self._executor.finish, order)))

    # ---- fluent composition ----

    def _classify(self, order: RepairOrder[New]) -> Result[RepairOrder, RepairOrder]:
        """Validate, recovering Invalid orders; Ok carries Low/HighPriority."""
        return dispatch(
            self._advance(self._executor.validate, order),
            a=lambda invalid: self._advance(self._executor.recover, invalid).map(
                lambda recovered: self._advance(self._executor.prioritize, recovered)
            ),
            b=Ok,
            c=Ok,
            d=Err,
        )

    def _obtain_worker(self, order: RepairOrder) -> Result[RepairOrder[WaitingForWorker], RepairOrder]:
        if isinstance(order.state, LowPriority):
            return self._advance(self._executor.enqueue, order).or_else(
                lambda escalated: Ok(self._advance(self._executor.enqueue, escalated))
            )
        return Ok(self._advance(self._executor.enqueue, order))

    # ---- plumbing ----

    def _advance(self, operation: Callable[[RepairOrder], T], order: RepairOrder) -> T:
        source = order.label
        outcome = operation(order)
        produced = _produced(outcome)
        logger.debug(
            "%s: %s -> %s", operation.__name__, source, produced.label,
            extra={"operation": operation.__name__, "source": source, "target": produced.label},
        )
        self._checkpoint(produced)
        return outcome

    def _checkpoint(self, order: RepairOrder) -> None:
        if self._checkpointer is not None:
            self._checkpointer(order)

    def _end(self, end: EndState) -> EndState:
        logger.info("Order reached %s", unwrap_end_state(end).label)
        return end

    @contextmanager
    def _bound(self, order: RepairOrder) -> Iterator[None]:
        token = order_number_var.set(order.order_number)
        try:
            yield
        finally:
            order_number_var.reset(token)
