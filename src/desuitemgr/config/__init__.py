"""Public config exports for desuitemgr."""

from __future__ import annotations

from .schema import DEFAULT_SETTINGS, RESOURCE_NAMES, merge_with_defaults, validate_settings
from .settings import Settings, default_config_dir, default_settings_path

__all__ = [
    "Settings",
    "DEFAULT_SETTINGS",
    "RESOURCE_NAMES",
    "default_config_dir",
    "default_settings_path",
    "merge_with_defaults",
    "validate_settings",
]
