"""Animation helpers for renderers driving the wheel."""

from spinwheel.animation.easing import Easing, get_easing, interpolate
from spinwheel.animation.timeline import SpinTimeline, Track, Keyframe, PlayState

__all__ = [
    "Easing",
    "get_easing",
    "interpolate",
    "SpinTimeline",
    "Track",
    "Keyframe",
    "PlayState",
]
