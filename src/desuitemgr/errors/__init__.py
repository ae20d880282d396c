"""Public error exports for desuitemgr."""

from __future__ import annotations

from .exceptions import (
    REJECTION,
    TRANSPORT,
    DesuiteError,
    HttpErrorInfo,
    InvalidStateError,
    LocalValidationError,
    NetworkError,
    ServerError,
    SettingsError,
    SettingsLoadError,
    SettingsValidationError,
    TransportError,
    classify_http_error,
    map_http_error,
    rejection_message,
)

__all__ = [
    "DesuiteError",
    "LocalValidationError",
    "InvalidStateError",
    "TransportError",
    "NetworkError",
    "ServerError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
    "HttpErrorInfo",
    "REJECTION",
    "TRANSPORT",
    "classify_http_error",
    "rejection_message",
    "map_http_error",
]
