"""
Engine settings using Pydantic.

Settings are loaded from environment variables with .env file support:
SPINWHEEL_DEBUG=true, SPINWHEEL_SPIN__PHASE_MODEL=four_phase, ...
"""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SpinSettings(BaseModel):
    """Spin timing and rotation parameters."""

    # Phase model: three_phase relies on the ease-out curve alone,
    # four_phase adds an overshoot and a settle bounce-back
    phase_model: Literal["three_phase", "four_phase"] = "three_phase"

    # Timing (milliseconds)
    spin_duration_ms: float = Field(default=5000.0, gt=0)
    settle_duration_ms: float = Field(default=1500.0, ge=0)

    # Extra revolutions per spin, inclusive range
    min_full_spins: int = Field(default=4, ge=0)
    max_full_spins: int = Field(default=5, ge=0)

    # Overshoot past the target (degrees, four_phase only)
    min_overshoot: float = Field(default=15.0, ge=0)
    max_overshoot: float = Field(default=25.0, ge=0)

    # Renderer curves
    spin_easing: str = "ease_out_quint"
    settle_easing: str = "ease_in_out_sine"

    # Allowed landing error (degrees)
    landing_tolerance: float = Field(default=0.1, gt=0)

    @model_validator(mode="after")
    def _check_ranges(self) -> "SpinSettings":
        if self.max_full_spins < self.min_full_spins:
            raise ValueError("max_full_spins must be >= min_full_spins")
        if self.max_overshoot < self.min_overshoot:
            raise ValueError("max_overshoot must be >= min_overshoot")
        return self

    @property
    def is_four_phase(self) -> bool:
        return self.phase_model == "four_phase"


class Settings(BaseSettings):
    """Main settings."""

    model_config = SettingsConfigDict(
        env_prefix="SPINWHEEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    log_level: str = "INFO"

    # Prize tables
    default_prize_count: int = Field(default=6, ge=3, le=8)
    remote_prize_url: str = ""
    remote_timeout: float = 10.0

    spin: SpinSettings = Field(default_factory=SpinSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
