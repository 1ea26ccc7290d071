"""Prize data model and validation helpers.

A Prize is one weighted outcome of the wheel. An OutcomeTable is the
ordered, validated set of prizes used for a round: 3 to 8 entries whose
probabilities sum to 1.0.
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Sequence, TypeVar

import numpy as np
from numpy.typing import NDArray

from spinwheel.core.errors import ValidationError

MIN_PRIZES = 3
MAX_PRIZES = 8
PROBABILITY_TOLERANCE = 1e-6


class PrizeType(str, Enum):
    """What landing on a segment gives the player."""
    NO_WIN = "no_win"
    FREE = "free"
    PURCHASE = "purchase"


@dataclass(frozen=True)
class CollectibleConfig:
    """Collectible currency shown in XP rewards (Stars, Bats, ...)."""
    icon: str
    name: str


@dataclass(frozen=True)
class RandomRewardConfig:
    """A nested random reward such as a Bronze Wheel."""
    icon: str
    name: str


@dataclass(frozen=True)
class XpReward:
    amount: int
    config: CollectibleConfig


@dataclass(frozen=True)
class RandomReward:
    config: RandomRewardConfig


@dataclass(frozen=True)
class FreeReward:
    """Free reward bundle. Any combination of fields may be set."""
    gc: int | None = None      # Gold Coins
    sc: int | None = None      # Sweeps Coins
    spins: int | None = None   # Free spins
    xp: XpReward | None = None
    random_reward: RandomReward | None = None

    @property
    def reward_count(self) -> int:
        """Number of distinct reward kinds in this bundle."""
        return sum(
            1 for part in (self.sc, self.gc, self.spins, self.xp, self.random_reward)
            if part
        )


@dataclass(frozen=True)
class PurchaseOffer:
    offer_id: str
    title: str
    description: str | None = None


@dataclass(frozen=True)
class Prize:
    """A weighted wheel outcome.

    Only ``probability`` matters to the engine; everything else is payload
    carried through for the presentation layer.
    """
    id: str
    type: PrizeType
    probability: float
    title: str
    slot_color: str = "#FFFFFF"
    slot_icon: str = ""
    description: str | None = None
    free_reward: FreeReward | None = None
    purchase_offer: PurchaseOffer | None = None

    def __post_init__(self) -> None:
        if not 0.0 < self.probability <= 1.0:
            raise ValidationError(
                f"Prize {self.id!r} probability must be in (0, 1], got {self.probability}"
            )


def _check_probability_sum(prizes: Sequence[Prize]) -> None:
    total = math.fsum(p.probability for p in prizes)
    if abs(total - 1.0) > PROBABILITY_TOLERANCE:
        raise ValidationError(
            f"Prize probabilities must sum to 1.0, got {total:.6f}. "
            f"Difference: {total - 1.0:.6f}"
        )


def _check_count(prizes: Sequence[Prize]) -> None:
    if len(prizes) < MIN_PRIZES or len(prizes) > MAX_PRIZES:
        raise ValidationError(
            f"Prize table must contain {MIN_PRIZES}-{MAX_PRIZES} prizes, got {len(prizes)}"
        )


def validate_prize_set(prizes: Sequence[Prize]) -> None:
    """Raise ValidationError unless the prizes form a legal outcome table."""
    _check_count(prizes)
    _check_probability_sum(prizes)


@dataclass(frozen=True)
class OutcomeTable:
    """Ordered, immutable table of 3-8 prizes summing to 1.0.

    Construction validates the table, so holding an OutcomeTable means the
    shape is already known to be good.
    """
    prizes: tuple[Prize, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "prizes", tuple(self.prizes))
        validate_prize_set(self.prizes)

    @classmethod
    def of(cls, prizes: "Sequence[Prize] | OutcomeTable") -> "OutcomeTable":
        """Return ``prizes`` as a validated table (no-op for tables)."""
        if isinstance(prizes, OutcomeTable):
            return prizes
        return cls(tuple(prizes))

    @property
    def probabilities(self) -> NDArray[np.float64]:
        return np.array([p.probability for p in self.prizes], dtype=np.float64)

    def __len__(self) -> int:
        return len(self.prizes)

    def __iter__(self) -> Iterator[Prize]:
        return iter(self.prizes)

    def __getitem__(self, index: int) -> Prize:
        return self.prizes[index]


P = TypeVar("P", bound=Prize)


def get_prize_by_index(prizes: Sequence[P], index: int) -> P:
    """Bounds-checked lookup (negative indices are rejected)."""
    if index < 0 or index >= len(prizes):
        raise ValidationError(f"Prize index {index} out of range [0, {len(prizes) - 1}]")
    return prizes[index]


def normalize_probabilities(prizes: Sequence[P]) -> list[P]:
    """Rescale probabilities so they sum to exactly 1.0."""
    total = math.fsum(p.probability for p in prizes)
    if total == 0:
        raise ValidationError("Total probability cannot be zero")
    return [replace(p, probability=p.probability / total) for p in prizes]


def abbreviate_number(num: int | float) -> str:
    """Short display form: 1000 -> '1K', 1500 -> '1.5K', 1000000 -> '1M'."""
    if num < 1000:
        return str(num)
    if num < 1_000_000:
        return f"{num / 1000:.{0 if num % 1000 == 0 else 1}f}K"
    return f"{num / 1_000_000:.{0 if num % 1_000_000 == 0 else 1}f}M"


def slot_display_text(prize: Prize, full_combo: bool = False, compact: bool = False) -> str:
    """Text for a prize slot.

    Slots show the single dominant reward (SC > Free Spins > GC > Random >
    XP); the prize table shows the full combo joined with " + ".
    """
    if prize.type == PrizeType.NO_WIN:
        return ""
    if prize.type == PrizeType.PURCHASE:
        return "200%"

    reward = prize.free_reward
    if reward is None:
        return ""

    spins_label = "Spins" if compact else "Free Spins"
    parts: list[str] = []
    if reward.sc:
        parts.append(f"SC {abbreviate_number(reward.sc)}")
    if reward.spins:
        parts.append(f"{abbreviate_number(reward.spins)} {spins_label}")
    if reward.gc:
        parts.append(f"GC {abbreviate_number(reward.gc)}")
    if reward.random_reward:
        parts.append(reward.random_reward.config.name)
    if reward.xp:
        parts.append(f"{abbreviate_number(reward.xp.amount)} {reward.xp.config.name}")

    if not parts:
        return ""
    return " + ".join(parts) if full_combo else parts[0]


def full_reward_description(prize: Prize) -> list[str]:
    """Lines for the reveal screen."""
    if prize.type == PrizeType.NO_WIN:
        return ["Better luck next time!"]

    parts: list[str] = []
    if prize.type == PrizeType.PURCHASE:
        if prize.purchase_offer:
            parts.append(prize.purchase_offer.title)
            if prize.purchase_offer.description:
                parts.append(prize.purchase_offer.description)
        return parts

    reward = prize.free_reward
    if reward:
        if reward.sc:
            parts.append(f"SC {reward.sc}")
        if reward.gc:
            parts.append(f"GC {reward.gc}")
        if reward.spins:
            parts.append(f"{reward.spins} Free Spins")
        if reward.xp:
            parts.append(f"{reward.xp.amount} {reward.xp.config.name}")
        if reward.random_reward:
            parts.append(f"1 {reward.random_reward.config.name}")

    return parts or [prize.title]
