"""Rotation planning: where the wheel must turn to land a segment.

Every plan is anchored on the wheel's actual last rest rotation, which is
never reduced mod 360. Each spin only adds a forward delta, so error cannot
accumulate no matter how many spins a wheel instance performs.
"""

import logging
from dataclasses import dataclass

from spinwheel.core.errors import ValidationError
from spinwheel.geometry.angles import FULL_TURN, POINTER_ANGLE, normalize_angle
from spinwheel.prizes.rng import Mulberry32

logger = logging.getLogger(__name__)

DEFAULT_MIN_FULL_SPINS = 4
DEFAULT_MAX_FULL_SPINS = 5


@dataclass(frozen=True)
class RotationPlan:
    """Planned rotation for one spin.

    Attributes:
        target_rotation: Absolute rotation at rest after the spin
        full_spins: Extra whole revolutions added for effect
        delta: Forward rotation in [0, 360) that aligns the segment
        overshoot: Degrees past the target before settling (four-phase only)
    """
    target_rotation: float
    full_spins: int
    delta: float
    overshoot: float = 0.0

    @property
    def rotation_with_overshoot(self) -> float:
        return self.target_rotation + self.overshoot


def _check_segment(target_segment_index: int, segment_count: int) -> None:
    if segment_count < 1:
        raise ValidationError(f"Segment count must be >= 1, got {segment_count}")
    if not 0 <= target_segment_index < segment_count:
        raise ValidationError(
            f"Segment index {target_segment_index} out of range [0, {segment_count - 1}]"
        )


def alignment_delta(current_rotation: float, target_segment_index: int, segment_count: int) -> float:
    """Smallest forward rotation bringing the segment under the pointer."""
    _check_segment(target_segment_index, segment_count)
    width = FULL_TURN / segment_count
    base_center = target_segment_index * width + width / 2 - 90
    current_center = normalize_angle(base_center + current_rotation)
    return normalize_angle(POINTER_ANGLE - current_center)


def initial_alignment_rotation(segment_index: int, segment_count: int) -> float:
    """Rest rotation that shows ``segment_index`` under the pointer at load."""
    return alignment_delta(0.0, segment_index, segment_count)


class RotationPlanner:
    """Turns a target segment into an absolute target rotation.

    The full-spin count (and four-phase overshoot) are drawn from the
    planner's own stream so they never disturb outcome selection.
    """

    def __init__(
        self,
        rng: Mulberry32,
        min_full_spins: int = DEFAULT_MIN_FULL_SPINS,
        max_full_spins: int = DEFAULT_MAX_FULL_SPINS,
        min_overshoot: float = 0.0,
        max_overshoot: float = 0.0,
    ):
        if min_full_spins < 0 or max_full_spins < min_full_spins:
            raise ValidationError(
                f"Invalid full spin range [{min_full_spins}, {max_full_spins}]"
            )
        if min_overshoot < 0 or max_overshoot < min_overshoot:
            raise ValidationError(
                f"Invalid overshoot range [{min_overshoot}, {max_overshoot}]"
            )
        self._rng = rng
        self.min_full_spins = min_full_spins
        self.max_full_spins = max_full_spins
        self.min_overshoot = min_overshoot
        self.max_overshoot = max_overshoot

    def plan(self, current_rotation: float, target_segment_index: int, segment_count: int) -> RotationPlan:
        """Plan the next spin from ``current_rotation``.

        Guarantees ``target_rotation >= current_rotation + min_full_spins*360``
        and that the target segment's center rests at the pointer angle.
        """
        delta = alignment_delta(current_rotation, target_segment_index, segment_count)
        full_spins = self._rng.randint(self.min_full_spins, self.max_full_spins)
        target_rotation = current_rotation + full_spins * FULL_TURN + delta

        overshoot = 0.0
        if self.max_overshoot > 0:
            overshoot = self._rng.uniform(self.min_overshoot, self.max_overshoot)

        logger.debug(
            f"Planned spin to segment {target_segment_index}/{segment_count}: "
            f"{current_rotation:.2f} -> {target_rotation:.2f} "
            f"({full_spins} spins + {delta:.2f}°, overshoot {overshoot:.2f}°)"
        )
        return RotationPlan(target_rotation, full_spins, delta, overshoot)
