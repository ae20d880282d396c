"""Result models for collaborator calls and user actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Literal, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful collaborator response carrying its value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(slots=True, frozen=True)
class Err:
    """Business rejection returned by a collaborator (not a transport failure)."""

    message: str

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


def result_from_payload(payload: Any) -> Result[Any]:
    """
    Build a Result from the backend's ``{"ok": ...}`` / ``{"err": ...}`` shape.

    Raises:
        ValueError: if payload is neither variant.
    """
    if isinstance(payload, dict):
        if "ok" in payload:
            return Ok(payload["ok"])
        if "err" in payload:
            return Err(_err_text(payload["err"]))
    raise ValueError(f"Unrecognized result payload: {payload!r}")


def _err_text(err: Any) -> str:
    # Variant errors arrive as {"NotFound": null}; plain strings pass through.
    if isinstance(err, dict) and len(err) == 1:
        (tag,) = err.keys()
        return str(tag)
    return str(err)


OutcomeStatus = Literal["succeeded", "rejected", "invalid", "failed"]


@dataclass(slots=True)
class ActionOutcome:
    """
    Outcome of a single user action (create/update/delete/upload/...).

    status:
        succeeded: collaborator accepted; affected stores were reloaded.
        rejected:  collaborator returned Err; nothing was reloaded.
        invalid:   local validation failed; no call was made.
        failed:    transport failure; nothing was reloaded.
    """

    action: str
    status: OutcomeStatus

    value: Any = None
    message: Optional[str] = None
    error_type: Optional[str] = None
    reloaded: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status == "succeeded"
