"""Configuration for the spin engine."""

from spinwheel.config.settings import Settings, SpinSettings, get_settings

__all__ = ["Settings", "SpinSettings", "get_settings"]
