"""Prize tables, seeded selection and providers."""

from spinwheel.prizes.models import (
    OutcomeTable,
    Prize,
    PrizeType,
    FreeReward,
    PurchaseOffer,
    validate_prize_set,
    normalize_probabilities,
    get_prize_by_index,
)
from spinwheel.prizes.rng import Mulberry32, generate_seed
from spinwheel.prizes.selector import Selection, select_outcome
from spinwheel.prizes.segments import PrizeSegment, SegmentKind, map_prizes_to_segments
from spinwheel.prizes.table import generate_production_prize_set, create_validated_production_prize_set
from spinwheel.prizes.provider import (
    PrizeSession,
    DefaultPrizeProvider,
    FixturePrizeProvider,
    RemotePrizeProvider,
    create_prize_provider,
)

__all__ = [
    "OutcomeTable",
    "Prize",
    "PrizeType",
    "FreeReward",
    "PurchaseOffer",
    "validate_prize_set",
    "normalize_probabilities",
    "get_prize_by_index",
    "Mulberry32",
    "generate_seed",
    "Selection",
    "select_outcome",
    "PrizeSegment",
    "SegmentKind",
    "map_prizes_to_segments",
    "generate_production_prize_set",
    "create_validated_production_prize_set",
    "PrizeSession",
    "DefaultPrizeProvider",
    "FixturePrizeProvider",
    "RemotePrizeProvider",
    "create_prize_provider",
]
