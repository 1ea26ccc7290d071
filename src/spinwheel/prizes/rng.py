"""Deterministic random streams for outcome selection and spin variety.

Uses the Mulberry32 generator: 32 bits of state, one add-and-mix step per
draw. Fast, reproducible across platforms and bit-compatible with the common
JavaScript implementation, which matters when a seed is replayed elsewhere.
"""

import secrets

from spinwheel.core.errors import ValidationError

UINT32_MASK = 0xFFFFFFFF
_TWO_POW_32 = 4294967296.0
_GOLDEN_GAMMA = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    """32-bit integer multiply, wrapping like a machine register."""
    return (a * b) & UINT32_MASK


def generate_seed() -> int:
    """Draw a uint32 seed from the OS cryptographic source."""
    return secrets.randbits(32)


class Mulberry32:
    """Seeded uint32 pseudo-random stream.

    Attributes:
        seed: The seed this stream was created with
    """

    def __init__(self, seed: int) -> None:
        if not 0 <= seed <= UINT32_MASK:
            raise ValidationError(f"Seed must be a uint32, got {seed}")
        self.seed = seed
        self._state = seed

    def next_uint32(self) -> int:
        """Advance the stream and return the next raw 32-bit value."""
        self._state = (self._state + _GOLDEN_GAMMA) & UINT32_MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & UINT32_MASK
        return (t ^ (t >> 14)) & UINT32_MASK

    def next_float(self) -> float:
        """Uniform float in [0, 1)."""
        return self.next_uint32() / _TWO_POW_32

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both ends inclusive."""
        if high < low:
            raise ValueError(f"Empty range: [{low}, {high}]")
        return low + int(self.next_float() * (high - low + 1))

    def uniform(self, low: float, high: float) -> float:
        """Uniform float in [low, high)."""
        return low + self.next_float() * (high - low)

    def __repr__(self) -> str:
        return f"Mulberry32(seed={self.seed})"
