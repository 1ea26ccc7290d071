"""
State machine for a single wheel's spin cycle.

States:
    IDLE: At rest, no spin in flight (initial state, and after reset)
    SPINNING: Main spin animation running toward the target rotation
    SETTLING: Bouncing back from the overshoot (four-phase model only)
    COMPLETE: At rest on the winning segment, ready to spin again

No state is terminal. Transitions are driven by events and validated
against an explicit table; a rejected event is logged and leaves the
session untouched.
"""

from enum import Enum, auto
from dataclasses import dataclass, replace
from typing import Callable, Literal
import logging

logger = logging.getLogger(__name__)

PhaseModel = Literal["three_phase", "four_phase"]


class WheelState(Enum):
    """Spin cycle states."""
    IDLE = auto()
    SPINNING = auto()
    SETTLING = auto()
    COMPLETE = auto()


class SpinEventType(Enum):
    """Events accepted by the spin state machine."""
    START_SPIN = auto()
    SPIN_COMPLETE = auto()
    SETTLE_COMPLETE = auto()
    RESET = auto()


@dataclass(frozen=True)
class SpinEvent:
    """An event with its payload.

    Attributes:
        type: Event type
        target_index: Winning segment (START_SPIN)
        target_rotation: Rotation the main spin drives toward (START_SPIN)
        final_rotation: Rest rotation after settling (START_SPIN, four-phase)
        reset_rotation: Rotation to rest at after RESET
    """
    type: SpinEventType
    target_index: int | None = None
    target_rotation: float = 0.0
    final_rotation: float = 0.0
    reset_rotation: float = 0.0


@dataclass(frozen=True)
class SpinSession:
    """Snapshot of one wheel's spin data. Replaced, never mutated."""
    state: WheelState = WheelState.IDLE
    rotation: float = 0.0
    target_rotation: float = 0.0
    target_segment_index: int | None = None
    final_rotation: float = 0.0


Reducer = Callable[[SpinSession, SpinEvent], SpinSession]


def _start_spin(session: SpinSession, event: SpinEvent) -> SpinSession:
    return replace(
        session,
        state=WheelState.SPINNING,
        target_segment_index=event.target_index,
        target_rotation=event.target_rotation,
        final_rotation=event.final_rotation,
    )


def _complete(session: SpinSession, event: SpinEvent) -> SpinSession:
    return replace(session, state=WheelState.COMPLETE, rotation=session.target_rotation)


def _settle(session: SpinSession, event: SpinEvent) -> SpinSession:
    # rotation stays put until COMPLETE; only the target moves back
    return replace(session, state=WheelState.SETTLING, target_rotation=session.final_rotation)


def _reset(session: SpinSession, event: SpinEvent) -> SpinSession:
    return SpinSession(
        state=WheelState.IDLE,
        rotation=event.reset_rotation,
        target_rotation=event.reset_rotation,
        target_segment_index=None,
        final_rotation=event.reset_rotation,
    )


_S = WheelState
_E = SpinEventType

_COMMON_TRANSITIONS: dict[tuple[WheelState, SpinEventType], Reducer] = {
    (_S.IDLE, _E.START_SPIN): _start_spin,
    (_S.COMPLETE, _E.START_SPIN): _start_spin,  # Direct re-spin
    (_S.COMPLETE, _E.RESET): _reset,
    (_S.IDLE, _E.RESET): _reset,
    (_S.SPINNING, _E.RESET): _reset,  # Forced reset, timer cancelled by owner
}

THREE_PHASE_TRANSITIONS: dict[tuple[WheelState, SpinEventType], Reducer] = {
    **_COMMON_TRANSITIONS,
    (_S.SPINNING, _E.SPIN_COMPLETE): _complete,
}

FOUR_PHASE_TRANSITIONS: dict[tuple[WheelState, SpinEventType], Reducer] = {
    **_COMMON_TRANSITIONS,
    (_S.SPINNING, _E.SPIN_COMPLETE): _settle,
    (_S.SETTLING, _E.SETTLE_COMPLETE): _complete,
    (_S.SETTLING, _E.RESET): _reset,
}


class SpinStateMachine:
    """
    Owns a SpinSession and applies events to it.

    Each accepted event replaces the session with the reducer's result and
    notifies listeners. Anything not in the transition table is an invalid
    transition: it is logged as a warning and the current state is
    returned unchanged.
    """

    def __init__(
        self,
        phase_model: PhaseModel = "three_phase",
        initial_rotation: float = 0.0,
    ) -> None:
        self.phase_model = phase_model
        self._transitions = (
            FOUR_PHASE_TRANSITIONS if phase_model == "four_phase" else THREE_PHASE_TRANSITIONS
        )
        self._session = SpinSession(
            rotation=initial_rotation,
            target_rotation=initial_rotation,
            final_rotation=initial_rotation,
        )
        self._listeners: list[Callable[[WheelState, WheelState, SpinSession], None]] = []
        logger.info(f"SpinStateMachine initialized ({phase_model}, rotation={initial_rotation:.2f})")

    @property
    def session(self) -> SpinSession:
        """Current session snapshot."""
        return self._session

    @property
    def state(self) -> WheelState:
        """Current state."""
        return self._session.state

    def accepts(self, event_type: SpinEventType) -> bool:
        """Check if the current state handles the given event type."""
        return (self._session.state, event_type) in self._transitions

    def dispatch(self, event: SpinEvent) -> WheelState:
        """
        Apply an event.

        Args:
            event: Event to apply

        Returns:
            The state after the event (unchanged if it was rejected)
        """
        old = self._session
        reducer = self._transitions.get((old.state, event.type))
        if reducer is None:
            logger.warning(
                f"Invalid transition: {event.type.name} in state {old.state.name} "
                f"(rotation={old.rotation:.2f})"
            )
            return old.state

        self._session = reducer(old, event)
        new = self._session
        logger.info(f"Wheel state: {old.state.name} -> {new.state.name} ({event.type.name})")

        for listener in self._listeners:
            try:
                listener(old.state, new.state, new)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return new.state

    def add_listener(
        self,
        callback: Callable[[WheelState, WheelState, SpinSession], None]
    ) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(
        self,
        callback: Callable[[WheelState, WheelState, SpinSession], None]
    ) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)
