"""Repair order entity — identity fields plus the current state tag.

An order is immutable. Moving it forward means building a new order with
``with_state()``; the old one is marked consumed and every transition
refuses it from then on.
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field, PrivateAttr

from repairflow.core.exceptions import ConsumedOrderError
from repairflow.models.states import BaseState, New, OrderState, StateLabel

S = TypeVar("S", bound=BaseState)
S2 = TypeVar("S2", bound=BaseState)


class Customer(BaseModel):
    """Customer status supplied with the order, never fetched."""

    model_config = {"frozen": True, "extra": "forbid"}

    has_outstanding_debt: bool = False
    is_banned: bool = False


class Employee(BaseModel):
    """Technician handed out by an ITechnicianPool."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str


class RepairOrder(BaseModel, Generic[S]):
    """Single repair order in state ``S``."""

    model_config = {"frozen": True, "extra": "forbid"}

    # --- Identity Fields ---
    order_number: int = Field(ge=0)
    damage_description: Optional[str] = None
    vehicle: str
    customer: Customer = Field(default_factory=Customer)

    # --- State Tag ---
    state: S

    _consumed: bool = PrivateAttr(default=False)

    @classmethod
    def create(
        cls,
        order_number: int,
        vehicle: str,
        customer: Customer | None = None,
        damage_description: str | None = None,
    ) -> RepairOrder[New]:
        """Create a fresh order in the initial state."""
        return RepairOrder[New](
            order_number=order_number,
            damage_description=damage_description,
            vehicle=vehicle,
            customer=customer or Customer(),
            state=New(),
        )

    @property
    def label(self) -> StateLabel:
        return StateLabel(self.state.label)

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    @property
    def consumed(self) -> bool:
        return self._consumed

    def consume(self) -> None:
        self._consumed = True

    def with_state(self, new_state: S2) -> RepairOrder[S2]:
        """Copy identity into a new order carrying ``new_state`` and consume this one."""
        if self._consumed:
            raise ConsumedOrderError("with_state", self.order_number)
        nxt = RepairOrder[type(new_state)](  # type: ignore[misc]
            order_number=self.order_number,
            damage_description=self.damage_description,
            vehicle=self.vehicle,
            customer=self.customer,
            state=new_state,
        )
        self.consume()
        return nxt

    def same_identity(self, other: RepairOrder) -> bool:
        return (
            self.order_number == other.order_number
            and self.damage_description == other.damage_description
            and self.vehicle == other.vehicle
            and self.customer == other.customer
        )


class OrderRecord(BaseModel):
    """Self-describing wire form of an order in any state."""

    model_config = {"frozen": True, "extra": "forbid"}

    order_number: int = Field(ge=0)
    damage_description: Optional[str] = None
    vehicle: str
    customer: Customer
    state: OrderState

    @classmethod
    def from_order(cls, order: RepairOrder) -> OrderRecord:
        return cls(
            order_number=order.order_number,
            damage_description=order.damage_description,
            vehicle=order.vehicle,
            customer=order.customer,
            state=order.state,
        )

    def to_order(self) -> RepairOrder:
        return RepairOrder[type(self.state)](  # type: ignore[misc]
            order_number=self.order_number,
            damage_description=self.damage_description,
            vehicle=self.vehicle,
            customer=self.customer,
            state=self.state,
        )
