"""Wheel angle geometry and rotation planning."""

from spinwheel.geometry.angles import (
    POINTER_ANGLE,
    segment_center_angle,
    normalize_angle,
    angular_distance,
    segment_under_pointer,
    landing_errors,
)
from spinwheel.geometry.planner import (
    RotationPlan,
    RotationPlanner,
    alignment_delta,
    initial_alignment_rotation,
)

__all__ = [
    "POINTER_ANGLE",
    "segment_center_angle",
    "normalize_angle",
    "angular_distance",
    "segment_under_pointer",
    "landing_errors",
    "RotationPlan",
    "RotationPlanner",
    "alignment_delta",
    "initial_alignment_rotation",
]
