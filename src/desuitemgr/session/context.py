"""Explicit session context and the persisted identity marker."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from desuitemgr.errors import InvalidStateError
from desuitemgr.models import Identity

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class SessionContext:
    """
    The signed-in identity, passed explicitly into every scoped call.

    There is no process-wide "current user": whoever issues a call hands over
    the session it is acting for.
    """

    identity: Identity

    @property
    def principal(self) -> str:
        return self.identity.principal


def require_identity(session: Optional[SessionContext]) -> SessionContext:
    """Return *session*, or raise InvalidStateError when nobody is signed in."""
    if session is None:
        raise InvalidStateError("No signed-in identity. Log in first.")
    return session


class IdentityStore:
    """
    Persists the single "current identity" marker across restarts.

    The marker is a small JSON document; logout deletes it. Nothing else is
    stored on the client.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def login(self, identity: Identity) -> SessionContext:
        """Persist *identity* as current and return its session."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps({"principal": identity.principal}), encoding="utf-8")
        tmp.replace(self._path)
        LOGGER.info("Signed in as %s", identity.principal)
        return SessionContext(identity)

    def logout(self) -> None:
        """Clear the marker. Logging out twice is harmless."""
        try:
            self._path.unlink()
        except FileNotFoundError:
            return
        LOGGER.info("Signed out")

    def restore(self) -> Optional[SessionContext]:
        """
        Return the persisted session, or None.

        A missing, unreadable or malformed marker means nobody is signed in.
        """
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            LOGGER.warning("Ignoring unreadable identity marker %s: %s", self._path, exc)
            return None

        principal = payload.get("principal") if isinstance(payload, dict) else None
        try:
            return SessionContext(Identity(principal))  # type: ignore[arg-type]
        except ValueError:
            LOGGER.warning("Ignoring malformed identity marker %s", self._path)
            return None
