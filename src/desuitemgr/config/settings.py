"""Settings file loading and typed access."""

from __future__ import annotations

import json
import logging
import os
import sys
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional

from jsonschema import ValidationError

from desuitemgr.errors import SettingsLoadError, SettingsValidationError

from .schema import DEFAULT_SETTINGS, merge_with_defaults

LOGGER = logging.getLogger(__name__)

APP_DIR_NAME = "desuitemgr"


def default_config_dir() -> Path:
    """Return the per-user configuration directory for the current platform."""

    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / APP_DIR_NAME
        return Path.home() / "AppData" / "Roaming" / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def default_settings_path() -> Path:
    return default_config_dir() / "settings.json"


class Settings:
    """
    Validated, read-only view of the settings file.

    Missing keys fall back to :data:`DEFAULT_SETTINGS`; the merged document is
    validated with jsonschema before it is exposed.
    """

    def __init__(self, data: Optional[dict[str, Any]] = None, *, path: Optional[Path] = None) -> None:
        try:
            self._data = merge_with_defaults(data)
        except ValidationError as exc:
            raise SettingsValidationError(
                exc.message,
                details={"path": list(exc.absolute_path)},
                cause=exc,
            ) from exc
        self._path = path

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        """Load settings from *path* (or the platform default); missing file means defaults."""

        target = path or default_settings_path()
        payload: Optional[dict[str, Any]] = None
        if target.exists():
            try:
                payload = json.loads(target.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise SettingsLoadError(
                    f"Cannot read settings file: {exc}",
                    details={"path": str(target)},
                    cause=exc,
                ) from exc
            if not isinstance(payload, dict):
                raise SettingsLoadError(
                    "Settings file must contain a JSON object",
                    details={"path": str(target)},
                )
            LOGGER.debug("Loaded settings from %s", target)
        else:
            LOGGER.debug("No settings file at %s, using defaults", target)
        return cls(payload, path=target)

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def as_dict(self) -> dict[str, Any]:
        return deepcopy(self._data)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return the value for *key*, supporting dotted access for nested keys."""

        target: Any = self._data
        for part in key.split("."):
            if not isinstance(target, dict) or part not in target:
                return default
            target = target[part]
        return target

    # Typed accessors -------------------------------------------------------

    @property
    def base_url(self) -> str:
        return str(self._data["backend"]["base_url"]).rstrip("/")

    @property
    def timeout_sec(self) -> float:
        return float(self._data["backend"]["timeout_sec"])

    @property
    def quota_bytes(self) -> int:
        return int(self._data["storage"]["quota_bytes"])

    @property
    def max_file_bytes(self) -> int:
        return int(self._data["storage"]["max_file_bytes"])

    def page_size(self, resource: str) -> int:
        try:
            return int(self._data["page_sizes"][resource])
        except KeyError:
            raise KeyError(f"No page size configured for resource {resource!r}") from None

    @property
    def identity_file(self) -> Path:
        """Where the current-identity marker is persisted."""
        configured = self._data.get("identity_file")
        if configured:
            return Path(configured)
        base = self._path.parent if self._path is not None else default_config_dir()
        return base / "identity.json"


__all__ = ["Settings", "default_config_dir", "default_settings_path", "DEFAULT_SETTINGS"]
