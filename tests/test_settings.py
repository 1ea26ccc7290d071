"""Tests for environment-driven settings."""
import pytest
from pydantic import ValidationError as PydanticValidationError

from spinwheel.config.settings import Settings, SpinSettings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # Keep a developer's .env and shell out of the results
    monkeypatch.chdir(tmp_path)
    for name in ("SPINWHEEL_DEBUG", "SPINWHEEL_SPIN__PHASE_MODEL", "SPINWHEEL_DEFAULT_PRIZE_COUNT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = Settings()
    assert settings.debug is False
    assert settings.default_prize_count == 6
    assert settings.spin.phase_model == "three_phase"
    assert not settings.spin.is_four_phase
    assert settings.spin.spin_duration_ms == 5000
    assert settings.spin.settle_duration_ms == 1500
    assert (settings.spin.min_full_spins, settings.spin.max_full_spins) == (4, 5)
    assert (settings.spin.min_overshoot, settings.spin.max_overshoot) == (15, 25)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("SPINWHEEL_DEBUG", "true")
    monkeypatch.setenv("SPINWHEEL_SPIN__PHASE_MODEL", "four_phase")
    monkeypatch.setenv("SPINWHEEL_DEFAULT_PRIZE_COUNT", "8")

    settings = Settings()
    assert settings.debug is True
    assert settings.spin.is_four_phase
    assert settings.default_prize_count == 8


def test_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("SPINWHEEL_SPIN__PHASE_MODEL=four_phase\n")
    assert Settings().spin.phase_model == "four_phase"


@pytest.mark.parametrize("kwargs", [
    {"min_full_spins": 6, "max_full_spins": 5},
    {"min_overshoot": 30, "max_overshoot": 20},
    {"spin_duration_ms": 0},
    {"phase_model": "five_phase"},
])
def test_spin_settings_validation(kwargs):
    with pytest.raises(PydanticValidationError):
        SpinSettings(**kwargs)


def test_prize_count_bounds(monkeypatch):
    monkeypatch.setenv("SPINWHEEL_DEFAULT_PRIZE_COUNT", "9")
    with pytest.raises(PydanticValidationError):
        Settings()


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
