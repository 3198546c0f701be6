"""Configuration and value-type catalog loading."""

from brale_dashboard.data.loader import (
    ENV_OVERRIDES,
    Settings,
    SettingsError,
    get_value_types,
    load_settings,
)

__all__ = [
    "ENV_OVERRIDES",
    "Settings",
    "SettingsError",
    "get_value_types",
    "load_settings",
]
