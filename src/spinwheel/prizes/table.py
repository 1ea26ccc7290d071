"""Production prize pool and deterministic prize-set generation."""

import logging

from spinwheel.core.errors import ValidationError
from spinwheel.prizes.models import (
    MAX_PRIZES,
    MIN_PRIZES,
    CollectibleConfig,
    FreeReward,
    Prize,
    PrizeType,
    PurchaseOffer,
    RandomReward,
    RandomRewardConfig,
    XpReward,
    normalize_probabilities,
    validate_prize_set,
)
from spinwheel.prizes.rng import Mulberry32, generate_seed

logger = logging.getLogger(__name__)

DEFAULT_PRODUCTION_PRIZE_COUNT = 6

# Placeholder icons - replaced by the theme loader at render time
PLACEHOLDER_ICON = ""

_STARS = CollectibleConfig(icon=PLACEHOLDER_ICON, name="Stars")
_BRONZE_WHEEL = RandomRewardConfig(icon=PLACEHOLDER_ICON, name="Bronze Wheel")

PRODUCTION_PRIZE_POOL: tuple[Prize, ...] = (
    # High-value SC rewards
    Prize("sc_500", PrizeType.FREE, 0.03, "500 Free SC", "#F97316",
          free_reward=FreeReward(sc=500)),
    Prize("sc_250", PrizeType.FREE, 0.06, "250 Free SC", "#FB923C",
          free_reward=FreeReward(sc=250)),
    Prize("sc_100", PrizeType.FREE, 0.10, "100 Free SC", "#FBBF24",
          free_reward=FreeReward(sc=100)),

    # SC + GC combo
    Prize("combo_50sc_5000gc", PrizeType.FREE, 0.08, "Combo Reward", "#FACC15",
          free_reward=FreeReward(sc=50, gc=5000)),

    # GC rewards
    Prize("gc_10000", PrizeType.FREE, 0.12, "10,000 GC", "#34D399",
          free_reward=FreeReward(gc=10000)),
    Prize("gc_5000", PrizeType.FREE, 0.15, "5,000 GC", "#60A5FA",
          free_reward=FreeReward(gc=5000)),

    # Free spins
    Prize("spins_25", PrizeType.FREE, 0.10, "25 Free Spins", "#A78BFA",
          free_reward=FreeReward(spins=25)),
    Prize("spins_10", PrizeType.FREE, 0.12, "10 Free Spins", "#C084FC",
          free_reward=FreeReward(spins=10)),

    # Collectibles
    Prize("stars_500", PrizeType.FREE, 0.08, "500 Stars", "#818CF8",
          free_reward=FreeReward(xp=XpReward(500, _STARS))),

    # Random reward
    Prize("bronze_wheel", PrizeType.FREE, 0.06, "Bronze Wheel", "#F472B6",
          description="",
          free_reward=FreeReward(random_reward=RandomReward(_BRONZE_WHEEL))),

    # Everything at once
    Prize("mega_combo", PrizeType.FREE, 0.01, "Mega Combo!", "#A855F7",
          free_reward=FreeReward(
              sc=100, gc=10000, spins=25,
              xp=XpReward(1000, _STARS),
              random_reward=RandomReward(_BRONZE_WHEEL),
          )),

    # Purchase offer
    Prize("special_offer", PrizeType.PURCHASE, 0.05, "Special Offer", "#EF4444",
          description="Limited time deal just for you!",
          free_reward=FreeReward(gc=10000, sc=100),
          purchase_offer=PurchaseOffer(
              "offer_001",
              "Exclusive Premium Pack",
              "Get 10,000 GC + 100 SC for half price!",
          )),

    # Consolation
    Prize("no_win", PrizeType.NO_WIN, 0.05, "No Win", "#64748B",
          description="Better luck next time!"),
)


def generate_production_prize_set(
    count: int = DEFAULT_PRODUCTION_PRIZE_COUNT,
    seed: int | None = None,
) -> list[Prize]:
    """Draw ``count`` prizes from the pool with a seeded shuffle.

    Fisher-Yates over a Mulberry32 stream, so the same seed always yields
    the same wheel. Probabilities are renormalised to sum to 1.0.
    """
    if count < MIN_PRIZES or count > MAX_PRIZES:
        raise ValidationError(
            f"Production prize set count must be between {MIN_PRIZES} and "
            f"{MAX_PRIZES} (received {count})."
        )

    shuffle_seed = generate_seed() if seed is None else seed
    rng = Mulberry32(shuffle_seed)
    pool = list(PRODUCTION_PRIZE_POOL)

    for i in range(len(pool) - 1, 0, -1):
        j = int(rng.next_float() * (i + 1))
        pool[i], pool[j] = pool[j], pool[i]

    selected = normalize_probabilities(pool[:count])
    logger.debug(f"Generated prize set {[p.id for p in selected]} (seed={shuffle_seed})")
    return selected


def create_validated_production_prize_set(
    count: int = DEFAULT_PRODUCTION_PRIZE_COUNT,
    seed: int | None = None,
) -> list[Prize]:
    """generate_production_prize_set followed by a full validation pass."""
    prizes = generate_production_prize_set(count, seed)
    validate_prize_set(prizes)
    return prizes
