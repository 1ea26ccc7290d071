"""Shared fixtures for spin engine tests."""
import pytest

from spinwheel.config.settings import SpinSettings
from spinwheel.core.scheduler import FrameScheduler
from spinwheel.prizes.models import FreeReward, Prize, PrizeType


def _make_prizes(*probabilities):
    return [
        Prize(f"p{i}", PrizeType.FREE, p, f"Prize {i}", free_reward=FreeReward(gc=100 * (i + 1)))
        for i, p in enumerate(probabilities)
    ]


@pytest.fixture
def make_prizes():
    """Factory building a plain prize list from probabilities."""
    return _make_prizes


@pytest.fixture
def three_prizes():
    return _make_prizes(0.5, 0.3, 0.2)


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def three_phase():
    return SpinSettings()


@pytest.fixture
def four_phase():
    return SpinSettings(phase_model="four_phase")
