"""Prize providers: where a round's prize table and winner come from.

Every provider exposes ``async load(seed_override=None) -> PrizeSession``.

    provider = DefaultPrizeProvider(count=6)
    session = await provider.load(seed_override=1234)
    engine = WheelEngine(len(session.prizes), prize_table=session.prizes)
    engine.start_spin(session.winning_index)
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Literal, Protocol, Sequence

import aiohttp

from spinwheel.config.settings import Settings, get_settings
from spinwheel.core.errors import PrizeProviderError, ValidationError
from spinwheel.prizes.models import (
    CollectibleConfig,
    FreeReward,
    OutcomeTable,
    Prize,
    PrizeType,
    PurchaseOffer,
    RandomReward,
    RandomRewardConfig,
    XpReward,
)
from spinwheel.prizes.rng import UINT32_MASK
from spinwheel.prizes.selector import select_outcome
from spinwheel.prizes.table import DEFAULT_PRODUCTION_PRIZE_COUNT, create_validated_production_prize_set

logger = logging.getLogger(__name__)

PrizeSource = Literal["default", "fixture", "remote"]


@dataclass(frozen=True)
class PrizeSession:
    """Prize table for one round plus the pre-resolved winner."""
    prizes: OutcomeTable
    winning_index: int
    seed: int
    source: PrizeSource


class PrizeProvider(Protocol):
    async def load(self, seed_override: int | None = None) -> PrizeSession:
        ...


def _resolve_seed(value: int | None) -> int:
    """Explicit seeds are used as-is; otherwise fall back to the clock."""
    if value is not None:
        return int(value) & UINT32_MASK
    return int(time.time() * 1000) & UINT32_MASK


def _check_winning_index(prizes: Sequence[Prize], winning_index: int) -> None:
    if winning_index < 0 or winning_index >= len(prizes):
        raise ValidationError(
            f"Invalid winning index: {winning_index} (prize count: {len(prizes)})"
        )


class DefaultPrizeProvider:
    """Builds a seeded production prize set and selects its winner."""

    def __init__(
        self,
        count: int = DEFAULT_PRODUCTION_PRIZE_COUNT,
        seed: int | None = None,
        source: PrizeSource = "default",
    ):
        self.count = count
        self.seed = seed
        self.source = source

    async def load(self, seed_override: int | None = None) -> PrizeSession:
        seed = _resolve_seed(seed_override if seed_override is not None else self.seed)
        table = OutcomeTable.of(create_validated_production_prize_set(self.count, seed))
        selection = select_outcome(table, seed)
        _check_winning_index(table, selection.index)

        logger.info(
            f"Prize session loaded: {len(table)} prizes, winner={selection.index} "
            f"({table[selection.index].id}), seed={selection.seed_used}"
        )
        return PrizeSession(table, selection.index, selection.seed_used, self.source)


class FixturePrizeProvider:
    """Returns a fixed prize table and winner. Used by tests and demos."""

    def __init__(self, prizes: Sequence[Prize], winning_index: int):
        self.prizes = prizes
        self.winning_index = winning_index

    async def load(self, seed_override: int | None = None) -> PrizeSession:
        table = OutcomeTable.of(self.prizes)
        _check_winning_index(table, self.winning_index)
        seed = _resolve_seed(seed_override)
        return PrizeSession(table, self.winning_index, seed, "fixture")


def _free_reward_from_payload(data: dict[str, Any] | None) -> FreeReward | None:
    if not data:
        return None
    xp = data.get("xp")
    random_reward = data.get("randomReward") or data.get("random_reward")
    return FreeReward(
        gc=data.get("gc"),
        sc=data.get("sc"),
        spins=data.get("spins"),
        xp=XpReward(xp["amount"], CollectibleConfig(**xp["config"])) if xp else None,
        random_reward=(
            RandomReward(RandomRewardConfig(**random_reward["config"]))
            if random_reward else None
        ),
    )


def prize_from_payload(data: dict[str, Any]) -> Prize:
    """Build a Prize from its JSON form (camelCase or snake_case keys)."""
    try:
        offer = data.get("purchaseOffer") or data.get("purchase_offer")
        return Prize(
            id=str(data["id"]),
            type=PrizeType(data["type"]),
            probability=float(data["probability"]),
            title=data.get("title", ""),
            slot_color=data.get("slotColor", data.get("slot_color", "#FFFFFF")),
            slot_icon=data.get("slotIcon", data.get("slot_icon", "")),
            description=data.get("description"),
            free_reward=_free_reward_from_payload(data.get("freeReward") or data.get("free_reward")),
            purchase_offer=(
                PurchaseOffer(
                    offer.get("offerId", offer.get("offer_id", "")),
                    offer.get("title", ""),
                    offer.get("description"),
                )
                if offer else None
            ),
        )
    except ValidationError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Malformed prize entry: {e}") from e


def prizes_from_payload(payload: dict[str, Any]) -> tuple[OutcomeTable, int | None, int | None]:
    """Parse a remote prize session document.

    Expected shape: ``{"prizes": [...], "winningIndex": 2, "seed": 99}``.
    The winner and seed are optional.
    """
    entries = payload.get("prizes")
    if not isinstance(entries, list):
        raise ValidationError("Prize payload must contain a 'prizes' list")

    table = OutcomeTable.of([prize_from_payload(entry) for entry in entries])
    winning_index = payload.get("winningIndex", payload.get("winning_index"))
    seed = payload.get("seed")
    return table, winning_index, seed


class RemotePrizeProvider:
    """Fetches the prize table for a round from an HTTP endpoint.

    The server may pre-resolve the winner; if it does not, the winner is
    selected locally from the returned table.
    """

    def __init__(self, url: str, timeout: float = 10.0):
        self._url = url
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers={"Accept": "application/json"},
            )
        return self._session

    async def load(self, seed_override: int | None = None) -> PrizeSession:
        params = {"seed": str(seed_override)} if seed_override is not None else None
        try:
            session = await self._get_session()
            async with session.get(self._url, params=params) as response:
                if response.status != 200:
                    raise PrizeProviderError(f"Prize endpoint returned HTTP {response.status}")
                payload = await response.json()
        except asyncio.TimeoutError as e:
            logger.error(f"Timeout loading prizes from {self._url}")
            raise PrizeProviderError("Timed out loading prize session") from e
        except aiohttp.ClientError as e:
            logger.error(f"Network error loading prizes: {e}")
            raise PrizeProviderError(f"Network error: {e}") from e

        table, winning_index, seed = prizes_from_payload(payload)
        seed = _resolve_seed(seed_override if seed_override is not None else seed)
        if winning_index is None:
            winning_index = select_outcome(table, seed).index
        _check_winning_index(table, winning_index)

        logger.info(f"Remote prize session loaded: {len(table)} prizes, winner={winning_index}")
        return PrizeSession(table, winning_index, seed, "remote")

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None


def create_prize_provider(settings: Settings | None = None) -> PrizeProvider:
    """Remote provider when a prize URL is configured, default otherwise."""
    settings = settings if settings is not None else get_settings()
    if settings.remote_prize_url:
        logger.info(f"Using remote prize provider: {settings.remote_prize_url}")
        return RemotePrizeProvider(settings.remote_prize_url, settings.remote_timeout)
    return DefaultPrizeProvider(count=settings.default_prize_count)
