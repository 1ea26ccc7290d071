"""Wheel engine facade."""

from spinwheel.wheel.engine import WheelEngine, WheelSnapshot

__all__ = ["WheelEngine", "WheelSnapshot"]
