"""Exception hierarchy and HTTP error classification for desuitemgr."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class DesuiteError(Exception):
    """
    Base exception for desuitemgr.

    Attributes:
        details: Optional structured information (e.g., HTTP status, field name).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class LocalValidationError(DesuiteError):
    """Raised when input fails client-side validation (no remote call is made)."""


class InvalidStateError(DesuiteError):
    """Raised when the library is used in an invalid state (e.g., no session)."""


class TransportError(DesuiteError):
    """Raised when a collaborator cannot be reached or does not answer properly."""


class NetworkError(TransportError):
    """Raised when network/timeout issues prevent the request."""


class ServerError(TransportError):
    """Raised for 5xx responses and unreadable response bodies."""


class SettingsError(DesuiteError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information used for classification."""

    status_code: int
    message: str | None = None
    details: dict[str, Any] | None = None


# Classification outcome for a failed HTTP exchange.
REJECTION = "rejection"
TRANSPORT = "transport"

_NOT_FOUND_MESSAGE = "not found"


def classify_http_error(info: HttpErrorInfo) -> str:
    """
    Decide whether an HTTP error is a business rejection or a transport failure.

    Policy:
        - 4xx (except 408 and 429) -> rejection; the collaborator answered and
          said no (validation, not found, quota exceeded, ...)
        - 408/429 -> transport
        - 5xx and anything else -> transport
    """
    code = info.status_code
    if 400 <= code <= 499 and code not in (408, 429):
        return REJECTION
    return TRANSPORT


def rejection_message(info: HttpErrorInfo) -> str:
    """User-facing text for a rejected request."""
    if info.message:
        return info.message
    if info.status_code == 404:
        return _NOT_FOUND_MESSAGE
    return f"request rejected (HTTP {info.status_code})"


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> TransportError:
    """
    Map a transport-class HTTP error to a desuitemgr exception.

    Policy:
        - 408/429 -> NetworkError
        - 5xx and unknown codes -> ServerError
    """
    details: dict[str, Any] = {"status_code": info.status_code}
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code in (408, 429):
        return NetworkError(message, details=details, cause=cause)
    return ServerError(message, details=details, cause=cause)
