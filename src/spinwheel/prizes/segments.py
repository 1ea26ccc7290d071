"""Mapping from prizes to wheel segment display properties."""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from spinwheel.prizes.models import Prize, PrizeType, abbreviate_number, slot_display_text


class SegmentKind(str, Enum):
    """Visual style of a segment."""
    JACKPOT = "jackpot"
    NOWIN = "nowin"
    ODD = "odd"
    EVEN = "even"


_SPECIAL_KINDS = (SegmentKind.JACKPOT, SegmentKind.NOWIN)


@dataclass(frozen=True)
class PrizeSegment:
    """Display description of one wheel segment."""
    prize: Prize
    index: int
    kind: SegmentKind
    display_text: str
    color: str
    icon_url: str
    use_purchase_image: bool
    use_random_reward_image: bool
    use_xp_image: bool
    is_no_win: bool
    is_combo: bool


def _assign_kinds(prizes: Sequence[Prize]) -> list[SegmentKind]:
    # Jackpot is the rarest prize that is not a no-win
    jackpot_index = -1
    lowest = float("inf")
    for idx, prize in enumerate(prizes):
        if prize.type != PrizeType.NO_WIN and prize.probability < lowest:
            lowest = prize.probability
            jackpot_index = idx

    kinds = [
        SegmentKind.NOWIN if prize.type == PrizeType.NO_WIN
        else SegmentKind.JACKPOT if idx == jackpot_index
        else SegmentKind.EVEN
        for idx, prize in enumerate(prizes)
    ]

    special = [i for i, kind in enumerate(kinds) if kind in _SPECIAL_KINDS]
    if not special:
        return [SegmentKind.EVEN if i % 2 == 0 else SegmentKind.ODD for i in range(len(kinds))]

    # Regular segments between consecutive specials form a chunk (wrapping
    # around the wheel). Alternation continues across chunk boundaries.
    style = SegmentKind.EVEN
    count = len(kinds)
    for n, start in enumerate(special):
        stop = special[(n + 1) % len(special)]
        current = (start + 1) % count
        while current != stop:
            if kinds[current] not in _SPECIAL_KINDS:
                kinds[current] = style
                style = SegmentKind.ODD if style == SegmentKind.EVEN else SegmentKind.EVEN
            current = (current + 1) % count
    return kinds


def _display_text(prize: Prize) -> str:
    if prize.type == PrizeType.NO_WIN:
        return "NO\nWIN"
    if prize.type == PrizeType.PURCHASE:
        return "200%"

    reward = prize.free_reward
    if reward is None:
        return slot_display_text(prize, compact=True)

    only = reward.reward_count == 1
    if only and reward.sc:
        return f"SC\n{abbreviate_number(reward.sc)}"
    if only and reward.gc:
        return f"GC\n{abbreviate_number(reward.gc)}"
    if only and reward.spins:
        return f"FREE SPINS\n{abbreviate_number(reward.spins)}"
    if only and reward.xp:
        # Number only; the renderer draws the collectible icon below
        return abbreviate_number(reward.xp.amount)
    if only and reward.random_reward:
        return ""

    # Combo: top two rewards by priority SC > Spins > GC > Random > XP
    parts: list[str] = []
    if reward.sc:
        parts.append(f"SC {abbreviate_number(reward.sc)}")
    if reward.spins:
        parts.append(f"{abbreviate_number(reward.spins)} Spins")
    if reward.gc:
        parts.append(f"GC {abbreviate_number(reward.gc)}")
    if reward.random_reward:
        parts.append(reward.random_reward.config.name)
    if reward.xp:
        parts.append(f"{abbreviate_number(reward.xp.amount)} {reward.xp.config.name}")

    if len(parts) >= 2:
        return f"{parts[0]}\n{parts[1]}"
    return ""


def map_prizes_to_segments(prizes: Sequence[Prize]) -> list[PrizeSegment]:
    """Build one PrizeSegment per prize, in wheel order."""
    kinds = _assign_kinds(prizes)
    segments = []
    for index, (prize, kind) in enumerate(zip(prizes, kinds)):
        reward = prize.free_reward
        count = reward.reward_count if reward else 0
        segments.append(PrizeSegment(
            prize=prize,
            index=index,
            kind=kind,
            display_text=_display_text(prize),
            color=prize.slot_color,
            icon_url=prize.slot_icon,
            use_purchase_image=prize.type == PrizeType.PURCHASE,
            use_random_reward_image=bool(reward and count == 1 and reward.random_reward),
            use_xp_image=bool(reward and count == 1 and reward.xp),
            is_no_win=prize.type == PrizeType.NO_WIN,
            is_combo=count >= 2,
        ))
    return segments


def get_winning_segment(segments: Sequence[PrizeSegment], winning_index: int) -> PrizeSegment | None:
    """Segment at ``winning_index``, or None when out of range."""
    if 0 <= winning_index < len(segments):
        return segments[winning_index]
    return None
