"""Core framework components for the spin engine."""

from .state import WheelState, SpinStateMachine, SpinSession, SpinEvent, SpinEventType
from .events import EventBus, Event, EventType
from .scheduler import FrameScheduler, AsyncioScheduler
from .errors import ValidationError, PrizeProviderError

__all__ = [
    "WheelState",
    "SpinStateMachine",
    "SpinSession",
    "SpinEvent",
    "SpinEventType",
    "EventBus",
    "Event",
    "EventType",
    "FrameScheduler",
    "AsyncioScheduler",
    "ValidationError",
    "PrizeProviderError",
]
