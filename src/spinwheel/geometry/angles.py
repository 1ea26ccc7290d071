"""Angle helpers for wheel segments.

Convention: angles in degrees, clockwise, 0 at 3 o'clock. Segment 0 starts
at 12 o'clock, hence the -90 offset in every segment center. The pointer is
fixed at 12 o'clock (-90).
"""

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

POINTER_ANGLE = -90.0
FULL_TURN = 360.0


def segment_angle(count: int) -> float:
    """Angular width of one segment."""
    return FULL_TURN / count


def segment_center_angle(index: int, count: int) -> float:
    """Center of segment ``index`` with the wheel at zero rotation."""
    width = segment_angle(count)
    return index * width + width / 2 - 90


def normalize_angle(angle: float) -> float:
    """Map any angle into [0, 360)."""
    return ((angle % FULL_TURN) + FULL_TURN) % FULL_TURN


def angular_distance(a: float, b: float) -> float:
    """Shortest circular distance between two angles, in [0, 180]."""
    diff = abs(normalize_angle(a) - normalize_angle(b))
    return min(diff, FULL_TURN - diff)


def segment_under_pointer(rotation: float, count: int) -> int:
    """Index of the segment covering the pointer at ``rotation``."""
    # Segment i spans [i*w - 90, (i+1)*w - 90) before rotation; the pointer
    # sits at -90, i.e. at offset -rotation from segment 0's leading edge.
    offset = normalize_angle(-rotation)
    index = math.floor(offset / segment_angle(count))
    return min(index, count - 1)


def landing_errors(indices: ArrayLike, rotations: ArrayLike, count: int) -> NDArray[np.float64]:
    """Angular distance between each segment center and the pointer.

    Vectorised form of
    ``angular_distance(segment_center_angle(i, count) + r, POINTER_ANGLE)``
    for bulk verification of many spins.
    """
    idx = np.asarray(indices, dtype=np.float64)
    rot = np.asarray(rotations, dtype=np.float64)
    width = FULL_TURN / count
    centers = idx * width + width / 2 - 90 + rot
    diff = np.abs(np.mod(centers, FULL_TURN) - np.mod(POINTER_ANGLE, FULL_TURN))
    return np.minimum(diff, FULL_TURN - diff)
