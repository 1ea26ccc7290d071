"""Weighted, reproducible outcome selection (roulette-wheel selection)."""

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from spinwheel.core.errors import ValidationError
from spinwheel.prizes.models import OutcomeTable, Prize
from spinwheel.prizes.rng import UINT32_MASK, Mulberry32, generate_seed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """Result of one selection.

    Attributes:
        index: Chosen outcome index
        seed_used: Seed that reproduces this selection
        cumulative: Prefix sums of the table probabilities (float32)
        roll: The uniform draw that picked ``index``
    """
    index: int
    seed_used: int
    cumulative: NDArray[np.float32]
    roll: float


def cumulative_weights(table: OutcomeTable) -> NDArray[np.float32]:
    """Prefix sums of the probabilities, one entry per outcome."""
    return np.cumsum(table.probabilities).astype(np.float32)


def select_outcome(
    table: "OutcomeTable | Sequence[Prize]",
    seed: int | None = None,
) -> Selection:
    """Pick an outcome index from a weighted table.

    The table is validated before anything is drawn, so bad input always
    fails the same way. With an explicit seed the result is fully
    reproducible; without one a fresh seed comes from the OS.

    Args:
        table: Outcome table (raw prize sequences are validated here)
        seed: Optional uint32 seed, used verbatim

    Returns:
        Selection with the index, the seed used and the cumulative weights

    Raises:
        ValidationError: Malformed table or seed outside uint32 range
    """
    table = OutcomeTable.of(table)
    if seed is not None and not 0 <= seed <= UINT32_MASK:
        raise ValidationError(f"Seed must be a uint32, got {seed}")

    cumulative = cumulative_weights(table)

    seed_used = generate_seed() if seed is None else seed
    roll = Mulberry32(seed_used).next_float()

    # Float error can leave the last prefix sum a hair under the roll
    index = len(cumulative) - 1
    for i, bound in enumerate(cumulative):
        if roll <= float(bound):
            index = i
            break

    logger.debug(f"Selected outcome {index} (roll={roll:.6f}, seed={seed_used})")
    return Selection(index=index, seed_used=seed_used, cumulative=cumulative, roll=roll)
