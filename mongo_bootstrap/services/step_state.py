"""
Step state machine.

    NOT_CHECKED
         |
         v
      CHECKED ----> CREATED --+
         |                    |
         +------> UPDATED ----+--> DONE
         |                    |
         +------> NO_OP ------+

INVARIANTS:
- A step cannot reach an outcome without passing CHECKED
- DONE is final
- There is no retry state; a failure aborts the run
"""
import logging
from typing import Any

from mongo_bootstrap.core.errors import InvalidStepTransition
from mongo_bootstrap.models.step import StepOutcome, StepState

logger = logging.getLogger(__name__)


VALID_TRANSITIONS: dict[StepState, set[StepState]] = {
    StepState.NOT_CHECKED: {StepState.CHECKED},
    StepState.CHECKED: {StepState.CREATED, StepState.UPDATED, StepState.NO_OP},
    StepState.CREATED: {StepState.DONE},
    StepState.UPDATED: {StepState.DONE},
    StepState.NO_OP: {StepState.DONE},
    StepState.DONE: set(),
}

OUTCOME_STATES: dict[StepState, StepOutcome] = {
    StepState.CREATED: StepOutcome.CREATED,
    StepState.UPDATED: StepOutcome.UPDATED,
    StepState.NO_OP: StepOutcome.NO_OP,
}


class StepTracker:
    """Tracks one step through the state machine."""

    def __init__(self, step: Any):
        self.step = step
        self.state = StepState.NOT_CHECKED
        self.history: list[StepState] = [StepState.NOT_CHECKED]

    def advance(self, to_state: StepState) -> None:
        if to_state not in VALID_TRANSITIONS[self.state]:
            raise InvalidStepTransition(self.state, to_state, step=self.step)
        logger.debug("%s: %s -> %s", self.step.describe(), self.state.value, to_state.value)
        self.state = to_state
        self.history.append(to_state)

    def checked(self) -> None:
        self.advance(StepState.CHECKED)

    def finish(self, outcome_state: StepState) -> StepOutcome:
        """Move to an outcome state and then DONE. Returns the outcome."""
        self.advance(outcome_state)
        self.advance(StepState.DONE)
        return OUTCOME_STATES[outcome_state]

    @property
    def is_done(self) -> bool:
        return self.state == StepState.DONE
