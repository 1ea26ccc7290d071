"""Deterministic prize wheel spin engine."""

from spinwheel.core.errors import ValidationError
from spinwheel.core.state import WheelState
from spinwheel.prizes.models import OutcomeTable, Prize, PrizeType
from spinwheel.prizes.selector import select_outcome
from spinwheel.wheel.engine import WheelEngine, WheelSnapshot

__version__ = "0.1.0"

__all__ = [
    "ValidationError",
    "WheelState",
    "OutcomeTable",
    "Prize",
    "PrizeType",
    "select_outcome",
    "WheelEngine",
    "WheelSnapshot",
]
