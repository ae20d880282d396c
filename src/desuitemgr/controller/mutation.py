"""MutationController: user actions against a collaborator, then refresh."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Mapping, Optional, Sequence, TypeVar

from desuitemgr.errors import LocalValidationError, TransportError
from desuitemgr.models import ActionOutcome, Err, Ok, Result
from desuitemgr.remote import ResourceCollaborator
from desuitemgr.session import SessionContext
from desuitemgr.store import CachedStore, ResourceStore

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

Validator = Callable[[Mapping[str, Any]], dict[str, Any]]

_GERUNDS: dict[str, str] = {
    "create": "creating",
    "update": "updating",
    "delete": "deleting",
    "upload": "uploading",
    "download": "downloading",
    "import": "importing",
    "export": "exporting",
    "save": "saving",
}


def _gerund(verb: str) -> str:
    return _GERUNDS.get(verb, verb + "ing")


class MutationController(Generic[T]):
    """
    Runs create/update/delete (and resource-specific actions) for one resource.

    Policy:
        - Local validation happens first; invalid input never reaches the
          collaborator.
        - Ok -> reload the resource store and every dependent store.
        - Err -> surface the collaborator's message; reload nothing.
        - TransportError -> log, surface a generic message; reload nothing.
        - Never retries and never raises for collaborator failures.
    """

    def __init__(
        self,
        collaborator: ResourceCollaborator[T],
        store: ResourceStore[T],
        session: SessionContext,
        *,
        noun: str,
        validator: Optional[Validator] = None,
        dependents: Sequence[CachedStore[Any]] = (),
    ) -> None:
        self._collaborator = collaborator
        self._store = store
        self._session = session
        self._noun = noun
        self._validator = validator
        self._dependents = tuple(dependents)
        self._last_error: Optional[str] = None

    @property
    def session(self) -> SessionContext:
        return self._session

    @property
    def store(self) -> ResourceStore[T]:
        return self._store

    @property
    def last_error(self) -> Optional[str]:
        """User-facing message of the most recent unsuccessful action."""
        return self._last_error

    def clear_error(self) -> None:
        self._last_error = None

    # ----------------------------
    # CRUD
    # ----------------------------
    def create(self, fields: Mapping[str, Any]) -> ActionOutcome:
        try:
            clean = self._clean(fields)
        except LocalValidationError as exc:
            return self.reject_locally("create", exc)
        return self.run("create", lambda: self._collaborator.create(self._session, clean))

    def update(self, record_id: int, fields: Mapping[str, Any]) -> ActionOutcome:
        try:
            clean = self._clean(fields)
        except LocalValidationError as exc:
            return self.reject_locally("update", exc)
        return self.run(
            "update",
            lambda: self._collaborator.update(self._session, record_id, clean),
        )

    def delete(self, record_id: int) -> ActionOutcome:
        return self.run(
            "delete",
            lambda: self._collaborator.delete(self._session, record_id),
            forget_id=record_id,
        )

    # ----------------------------
    # Generic action runner
    # ----------------------------
    def run(
        self,
        verb: str,
        call: Callable[[], Result[Any]],
        *,
        forget_id: Optional[int] = None,
        reload: bool = True,
    ) -> ActionOutcome:
        """
        Invoke *call* and apply the refresh policy.

        Args:
            verb: What the user did ("create", "upload", ...); used in messages.
            call: Zero-argument function performing the collaborator call.
            forget_id: Record id to drop from the cache on success (deletes).
            reload: Set False for read-only actions such as downloads.
        """
        label = f"{verb} {self._noun}"
        try:
            result = call()
        except TransportError as exc:
            LOGGER.warning("Failed to %s", label, exc_info=exc)
            message = f"Failed to {label}. Please try again later."
            self._last_error = message
            return ActionOutcome(
                action=label,
                status="failed",
                message=message,
                error_type=exc.__class__.__name__,
            )

        if isinstance(result, Err):
            message = f"Error {_gerund(verb)} {self._noun}: {result.message}"
            LOGGER.info("%s rejected: %s", label, result.message)
            self._last_error = message
            return ActionOutcome(
                action=label,
                status="rejected",
                message=message,
                error_type="Rejected",
            )

        self._last_error = None
        if forget_id is not None:
            self._store.forget(forget_id)
        reloaded = self._reload() if reload else False
        return ActionOutcome(
            action=label,
            status="succeeded",
            value=result.value if isinstance(result, Ok) else None,
            reloaded=reloaded,
        )

    def reject_locally(self, verb: str, exc: LocalValidationError) -> ActionOutcome:
        """Record a validation failure; no collaborator call was made."""
        message = str(exc)
        self._last_error = message
        return ActionOutcome(
            action=f"{verb} {self._noun}",
            status="invalid",
            message=message,
            error_type=exc.__class__.__name__,
        )

    # ----------------------------
    # Internals
    # ----------------------------
    def _clean(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        if self._validator is None:
            return dict(fields)
        return self._validator(fields)

    def _reload(self) -> bool:
        """Refresh the resource store, then its dependents. True if the first succeeded."""
        primary = self._store.load(self._session)
        for store in self._dependents:
            store.load(self._session)
        return isinstance(primary, Ok)
