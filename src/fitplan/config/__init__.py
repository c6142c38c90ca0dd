"""Configuration management."""

from fitplan.config.settings import (
    AdjustmentConfig,
    Settings,
    get_settings,
    reload_settings,
)

__all__ = ["AdjustmentConfig", "Settings", "get_settings", "reload_settings"]
