from enum import Enum

from payhere.exceptions import InvalidTransitionError


class BuilderState(str, Enum):
    EMPTY = "empty"
    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"


SET_FIELD = "set_field"
FINALIZE = "finalize"
RESET = "reset"

TRANSITIONS: dict[BuilderState, dict[str, BuilderState]] = {
    BuilderState.EMPTY: {
        SET_FIELD: BuilderState.ACCUMULATING,
        RESET: BuilderState.EMPTY,
    },
    BuilderState.ACCUMULATING: {
        SET_FIELD: BuilderState.ACCUMULATING,
        FINALIZE: BuilderState.FINALIZED,
        RESET: BuilderState.EMPTY,
    },
    BuilderState.FINALIZED: {
        SET_FIELD: BuilderState.ACCUMULATING,
        FINALIZE: BuilderState.FINALIZED,
        RESET: BuilderState.EMPTY,
    },
}


def apply_transition(current: BuilderState, event: str) -> BuilderState:
    """
    Apply a builder lifecycle transition.

    Returns the new state if the transition is valid. Raises
    InvalidTransitionError for any event the table does not list for the
    current state. The builder checks required fields before finalizing, so
    this only fires for direct callers.
    """
    state_transitions = TRANSITIONS.get(current, {})
    if event in state_transitions:
        return state_transitions[event]

    raise InvalidTransitionError(
        f"Event '{event}' cannot be applied to a builder in '{current.value}' state.",
        {"state": current.value, "event": event},
    )
