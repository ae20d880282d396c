"""Schema helpers for the desuitemgr settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

_MB = 1024 * 1024

RESOURCE_NAMES: tuple[str, ...] = ("files", "notes", "photos", "tasks", "expenses")

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "desuitemgr/settings.schema.json",
    "type": "object",
    "required": ["schema", "backend", "page_sizes", "storage"],
    "properties": {
        "schema": {"const": "desuitemgr/settings@1"},
        "backend": {
            "type": "object",
            "required": ["base_url", "timeout_sec"],
            "properties": {
                "base_url": {"type": "string", "minLength": 1},
                "timeout_sec": {"type": "number", "exclusiveMinimum": 0},
            },
            "additionalProperties": False,
        },
        "page_sizes": {
            "type": "object",
            "properties": {
                name: {"type": "integer", "minimum": 1} for name in RESOURCE_NAMES
            },
            "required": list(RESOURCE_NAMES),
            "additionalProperties": False,
        },
        "storage": {
            "type": "object",
            "required": ["quota_bytes", "max_file_bytes"],
            "properties": {
                "quota_bytes": {"type": "integer", "minimum": 0},
                "max_file_bytes": {"type": "integer", "minimum": 0},
            },
            "additionalProperties": False,
        },
        "identity_file": {"type": ["string", "null"]},
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "desuitemgr/settings@1",
    "backend": {
        "base_url": "http://127.0.0.1:4943",
        "timeout_sec": 30.0,
    },
    "page_sizes": {
        "files": 5,
        "notes": 5,
        "photos": 12,
        "tasks": 10,
        "expenses": 10,
    },
    "storage": {
        "quota_bytes": 100 * _MB,
        "max_file_bytes": 10 * _MB,
    },
    "identity_file": None,
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)

_NESTED_SECTIONS: tuple[str, ...] = ("backend", "page_sizes", "storage")


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in _NESTED_SECTIONS and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = [
    "DEFAULT_SETTINGS",
    "RESOURCE_NAMES",
    "SETTINGS_SCHEMA",
    "merge_with_defaults",
    "validate_settings",
]
