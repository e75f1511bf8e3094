"""Tests for CheckpointWriter wired into the WorkflowDriver."""

from __future__ import annotations

import pytest

from repairflow.checkpoint.codec import CheckpointCodec, Granularity
from repairflow.checkpoint.writer import CheckpointWriter
from repairflow.models.order import RepairOrder
from repairflow.models.states import LowPriority, StateLabel
from repairflow.persistence.memory_backend import MemoryCheckpointStore
from repairflow.workflow.driver import WorkflowDriver, unwrap_end_state

SAMPLE_ORDERS = [1, 2, 3, 4, 9, 12, 998, 1000, 1003, 1004, 1006]


@pytest.fixture
def store():
    return MemoryCheckpointStore()


def _writer(store, granularity: Granularity) -> CheckpointWriter:
    return CheckpointWriter(CheckpointCodec(granularity), store)


class TestEveryStep:
    def test_trail_matches_transition_path(self, store):
        writer = _writer(store, Granularity.EVERY_STEP)
        WorkflowDriver(checkpointer=writer).process(RepairOrder.create(4, "Mini"))
        assert [o.label for o in writer.history(4)] == [
            "New", "Invalid", "Recovered", "LowPriority", "HighPriority",
            "WaitingForWorker", "WaitingForPrinter", "Finished",
        ]

    def test_load_latest_is_terminal(self, store):
        writer = _writer(store, Granularity.EVERY_STEP)
        WorkflowDriver(checkpointer=writer).process(RepairOrder.create(1, "Mini"))
        assert writer.load_latest(1).label == StateLabel.GARBAGE

    def test_load_latest_unknown_order(self, store):
        assert _writer(store, Granularity.EVERY_STEP).load_latest(77) is None

    @pytest.mark.parametrize("number", SAMPLE_ORDERS)
    def test_resume_from_any_checkpoint_reaches_same_terminal(self, store, number):
        writer = _writer(store, Granularity.EVERY_STEP)
        expected = unwrap_end_state(
            WorkflowDriver(checkpointer=writer).process(RepairOrder.create(number, "Mini"))
        )

        for checkpoint in writer.history(number):
            if checkpoint.is_terminal:
                continue
            resumed = unwrap_end_state(WorkflowDriver().resume(checkpoint))
            assert resumed.label == expected.label
            assert resumed.same_identity(expected)


class TestStartEnd:
    def test_only_entry_and_exit_stored(self, store):
        writer = _writer(store, Granularity.START_END)
        WorkflowDriver(checkpointer=writer).process(RepairOrder.create(4, "Mini"))
        assert [o.label for o in writer.history(4)] == ["New", "Finished"]

    def test_skipped_state_returns_none(self, store):
        writer = _writer(store, Granularity.START_END)
        low = RepairOrder.create(5, "Mini").with_state(LowPriority())
        assert writer(low) is None
        assert store.history(5) == []

    def test_restart_from_new_reaches_same_terminal(self, store):
        writer = _writer(store, Granularity.START_END)
        WorkflowDriver(checkpointer=writer).process(RepairOrder.create(1004, "Mini"))
        inbound, outbound = writer.history(1004)
        assert unwrap_end_state(WorkflowDriver().process(inbound)).label == outbound.label
