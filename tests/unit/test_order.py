"""Tests for the RepairOrder entity and the state catalog."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from repairflow.core.exceptions import ConsumedOrderError
from repairflow.models.order import Customer, RepairOrder
from repairflow.models.states import (
    INITIAL_LABEL,
    STATE_TYPES,
    TERMINAL_LABELS,
    Finished,
    Invalid,
    LowPriority,
    New,
    StateLabel,
)


@pytest.fixture
def order():
    return RepairOrder.create(
        7, "VW Golf", customer=Customer(is_banned=True), damage_description="dented door",
    )


class TestCatalog:
    def test_catalog_is_closed_and_complete(self):
        assert set(STATE_TYPES) == set(StateLabel)
        assert len(StateLabel) == 13

    def test_exactly_four_terminal_states(self):
        assert TERMINAL_LABELS == {
            StateLabel.FINISHED, StateLabel.APRIL_FOOLS, StateLabel.GARBAGE, StateLabel.KRANGLED,
        }

    def test_initial_state_is_new(self):
        assert INITIAL_LABEL == StateLabel.NEW
        assert not New().is_terminal

    def test_labels_match_class_names(self):
        for label, state_type in STATE_TYPES.items():
            assert state_type.__name__ == label

    def test_invalid_requires_errors(self):
        with pytest.raises(ValidationError):
            Invalid()

    def test_validation_errors_stored_as_tuple(self):
        state = Invalid(validation_errors=["Customer is banned from the shop"])
        assert state.validation_errors == ("Customer is banned from the shop",)

    def test_state_rejects_extra_fields(self):
        with pytest.raises(ValidationError):
            Finished(invoice="INV-1")


class TestRepairOrder:
    def test_create_starts_in_new(self, order):
        assert order.label == StateLabel.NEW
        assert isinstance(order.state, New)
        assert not order.consumed

    def test_identity_fields_are_frozen(self, order):
        with pytest.raises(ValidationError):
            order.order_number = 8

    def test_negative_order_number_rejected(self):
        with pytest.raises(ValidationError):
            RepairOrder.create(-1, "VW Golf")

    def test_with_state_keeps_identity(self, order):
        moved = order.with_state(LowPriority())
        assert moved.same_identity(order)
        assert moved.label == StateLabel.LOW_PRIORITY
        assert moved.damage_description == "dented door"
        assert moved.customer.is_banned

    def test_with_state_consumes_source(self, order):
        moved = order.with_state(LowPriority())
        assert order.consumed
        assert not moved.consumed

    def test_with_state_refuses_consumed_source(self, order):
        order.with_state(LowPriority())
        with pytest.raises(ConsumedOrderError):
            order.with_state(Finished())

    def test_terminal_flag(self, order):
        assert order.with_state(Finished()).is_terminal
