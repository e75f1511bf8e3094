"""Branch outcome values returned by transitions.

``OneOf4`` is the four-way branch: exactly one of ``A``, ``B``, ``C`` or ``D``
wraps the produced order. Handle it with a ``match`` statement that ends in
``assert_never`` so a forgotten label is a type error, or with ``dispatch()``,
which demands a handler for every label.

``Result`` is the two-way form (``Ok`` / ``Err``) used by binary transitions
and by the fluent driver.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, NoReturn, TypeVar, Union

from repairflow.core.exceptions import ContractViolation

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")
T1 = TypeVar("T1")
T2 = TypeVar("T2")
T3 = TypeVar("T3")
T4 = TypeVar("T4")
R = TypeVar("R")


# ---------------------------------------------------------------------------
# One of four
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class A(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class B(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class C(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class D(Generic[T]):
    value: T


OneOf4 = Union[A[T1], B[T2], C[T3], D[T4]]


def dispatch(
    outcome: OneOf4[T1, T2, T3, T4],
    *,
    a: Callable[[T1], R],
    b: Callable[[T2], R],
    c: Callable[[T3], R],
    d: Callable[[T4], R],
) -> R:
    """Call the handler matching the populated label."""
    match outcome:
        case A(value=value):
            return a(value)
        case B(value=value):
            return b(value)
        case C(value=value):
            return c(value)
        case D(value=value):
            return d(value)
        case _:
            raise ContractViolation(f"Expected a OneOf4 outcome, got {type(outcome).__name__}")


# ---------------------------------------------------------------------------
# Two-way result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def and_then(self, fn: Callable[[T], Result[U, F]]) -> Result[U, F]:
        return fn(self.value)

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        return Ok(fn(self.value))

    def map_err(self, fn: Callable[[Any], Any]) -> Ok[T]:
        return self

    def or_else(self, fn: Callable[[Any], Any]) -> Ok[T]:
        return self

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise ContractViolation(f"unwrap_err() called on Ok({self.value!r})")


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    value: E

    def is_ok(self) -> bool:
        return False

    def and_then(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self

    def map(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self

    def map_err(self, fn: Callable[[E], F]) -> Err[F]:
        return Err(fn(self.value))

    def or_else(self, fn: Callable[[E], Result[U, F]]) -> Result[U, F]:
        return fn(self.value)

    def unwrap(self) -> NoReturn:
        raise ContractViolation(f"unwrap() called on Err({self.value!r})")

    def unwrap_err(self) -> E:
        return self.value


Result = Union[Ok[T], Err[E]]
