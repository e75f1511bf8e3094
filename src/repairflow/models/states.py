"""Closed catalog of repair-order states.

Every state is a frozen pydantic model whose ``label`` literal identifies it
on the wire. ``OrderState`` is the discriminated union over the whole set;
the codec decodes through it, so nothing outside this module can introduce
a new state.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class StateLabel(StrEnum):
    NEW = "New"
    INVALID = "Invalid"
    RECOVERED = "Recovered"
    APRIL_FOOLS = "AprilFools"
    LOW_PRIORITY = "LowPriority"
    HIGH_PRIORITY = "HighPriority"
    WAITING_FOR_WORKER = "WaitingForWorker"
    GARBAGE = "Garbage"
    WAITING_FOR_PRINTER = "WaitingForPrinter"
    WAITING_FOR_FRIDAY_AFTERNOON = "WaitingForFridayAfternoon"
    WORK_IN_PROGRESS = "WorkInProgress"
    KRANGLED = "Krangled"
    FINISHED = "Finished"


class BaseState(BaseModel):
    """Common config for state payloads."""

    model_config = {"frozen": True, "extra": "forbid"}

    label: str

    @property
    def is_terminal(self) -> bool:
        return self.label in TERMINAL_LABELS


class New(BaseState):
    label: Literal["New"] = "New"


class Invalid(BaseState):
    label: Literal["Invalid"] = "Invalid"
    validation_errors: tuple[str, ...]


class Recovered(BaseState):
    label: Literal["Recovered"] = "Recovered"


class AprilFools(BaseState):
    label: Literal["AprilFools"] = "AprilFools"


class LowPriority(BaseState):
    label: Literal["LowPriority"] = "LowPriority"


class HighPriority(BaseState):
    label: Literal["HighPriority"] = "HighPriority"


class WaitingForWorker(BaseState):
    label: Literal["WaitingForWorker"] = "WaitingForWorker"


class Garbage(BaseState):
    label: Literal["Garbage"] = "Garbage"


class WaitingForPrinter(BaseState):
    label: Literal["WaitingForPrinter"] = "WaitingForPrinter"


# Reserved: no transition produces or consumes these yet.
class WaitingForFridayAfternoon(BaseState):
    label: Literal["WaitingForFridayAfternoon"] = "WaitingForFridayAfternoon"


class WorkInProgress(BaseState):
    label: Literal["WorkInProgress"] = "WorkInProgress"


class Krangled(BaseState):
    label: Literal["Krangled"] = "Krangled"


class Finished(BaseState):
    label: Literal["Finished"] = "Finished"


OrderState = Annotated[
    Union[
        New,
        Invalid,
        Recovered,
        AprilFools,
        LowPriority,
        HighPriority,
        WaitingForWorker,
        Garbage,
        WaitingForPrinter,
        WaitingForFridayAfternoon,
        WorkInProgress,
        Krangled,
        Finished,
    ],
    Field(discriminator="label"),
]

STATE_TYPES: dict[StateLabel, type[BaseState]] = {
    StateLabel.NEW: New,
    StateLabel.INVALID: Invalid,
    StateLabel.RECOVERED: Recovered,
    StateLabel.APRIL_FOOLS: AprilFools,
    StateLabel.LOW_PRIORITY: LowPriority,
    StateLabel.HIGH_PRIORITY: HighPriority,
    StateLabel.WAITING_FOR_WORKER: WaitingForWorker,
    StateLabel.GARBAGE: Garbage,
    StateLabel.WAITING_FOR_PRINTER: WaitingForPrinter,
    StateLabel.WAITING_FOR_FRIDAY_AFTERNOON: WaitingForFridayAfternoon,
    StateLabel.WORK_IN_PROGRESS: WorkInProgress,
    StateLabel.KRANGLED: Krangled,
    StateLabel.FINISHED: Finished,
}

INITIAL_LABEL: StateLabel = StateLabel.NEW

TERMINAL_LABELS: frozenset[StateLabel] = frozenset([
    StateLabel.FINISHED,
    StateLabel.APRIL_FOOLS,
    StateLabel.GARBAGE,
    StateLabel.KRANGLED,
])
