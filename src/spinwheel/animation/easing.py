"""Easing curves for the spin animation.

A renderer maps normalized phase progress t (0.0 to 1.0) through one of
these to get the eased fraction of the rotation covered so far. The
deceleration curves are the ones that read well on a wheel: the harder the
ease-out, the longer the wheel creeps past the last few segments.
"""

from enum import Enum, auto
from typing import Callable
import math


class Easing(Enum):
    """Available easing curves."""

    LINEAR = auto()
    EASE_OUT_QUAD = auto()
    EASE_OUT_CUBIC = auto()
    EASE_OUT_QUART = auto()
    EASE_OUT_QUINT = auto()
    EASE_OUT_EXPO = auto()
    EASE_OUT_BACK = auto()
    EASE_IN_OUT_SINE = auto()
    EASE_IN_OUT_CUBIC = auto()


EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease_out_quad(t: float) -> float:
    return 1 - (1 - t) * (1 - t)


def ease_out_cubic(t: float) -> float:
    return 1 - pow(1 - t, 3)


def ease_out_quart(t: float) -> float:
    return 1 - pow(1 - t, 4)


def ease_out_quint(t: float) -> float:
    """Very strong deceleration; the default main-spin curve."""
    return 1 - pow(1 - t, 5)


def ease_out_expo(t: float) -> float:
    return 1 if t == 1 else 1 - pow(2, -10 * t)


def ease_out_back(t: float) -> float:
    """Decelerate past 1.0 and come back (built-in overshoot)."""
    c1 = 1.70158
    c3 = c1 + 1
    return 1 + c3 * pow(t - 1, 3) + c1 * pow(t - 1, 2)


def ease_in_out_sine(t: float) -> float:
    """Gentle curve used for the settle bounce-back."""
    return -(math.cos(math.pi * t) - 1) / 2


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - pow(-2 * t + 2, 3) / 2


_EASING_FUNCTIONS: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE_OUT_QUAD: ease_out_quad,
    Easing.EASE_OUT_CUBIC: ease_out_cubic,
    Easing.EASE_OUT_QUART: ease_out_quart,
    Easing.EASE_OUT_QUINT: ease_out_quint,
    Easing.EASE_OUT_EXPO: ease_out_expo,
    Easing.EASE_OUT_BACK: ease_out_back,
    Easing.EASE_IN_OUT_SINE: ease_in_out_sine,
    Easing.EASE_IN_OUT_CUBIC: ease_in_out_cubic,
}


def get_easing(easing: Easing | str) -> EasingFunc:
    """Get an easing function by enum or name.

    Args:
        easing: Easing enum value or name (e.g., "ease_out_quint")

    Returns:
        The easing function

    Raises:
        ValueError: If the name is not recognized
    """
    if isinstance(easing, str):
        try:
            easing = Easing[easing.upper()]
        except KeyError:
            raise ValueError(f"Unknown easing function: {easing}") from None

    func = _EASING_FUNCTIONS.get(easing)
    if func is None:
        raise ValueError(f"No function registered for: {easing}")
    return func


def interpolate(start: float, end: float, t: float, easing: Easing | str = Easing.LINEAR) -> float:
    """Interpolate between two values using an easing function."""
    eased_t = get_easing(easing)(max(0.0, min(1.0, t)))
    return start + (end - start) * eased_t
