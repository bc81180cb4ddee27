"""Configuration management with Pydantic Settings."""

from defense_drill.config.settings import (
    CATEGORY_NAME_SELF_DEFENSE,
    DefenseDrillSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "CATEGORY_NAME_SELF_DEFENSE",
    "DefenseDrillSettings",
    "clear_settings_cache",
    "get_settings",
]
