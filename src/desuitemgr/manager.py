"""WorkspaceManager: sign-in lifecycle and the per-identity set of panels."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Optional

from desuitemgr.config import Settings
from desuitemgr.models import Identity, Result
from desuitemgr.panel import ExpensesPanel, FilesPanel, NotesPanel, PhotosPanel, TasksPanel
from desuitemgr.remote import HttpBackend
from desuitemgr.session import IdentityStore, SessionContext, require_identity
from desuitemgr.view import StorageUsage

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class DashboardSummary:
    """Overview numbers shown after sign-in."""

    counts: dict[str, int]
    storage: StorageUsage

    def format_storage(self) -> str:
        return self.storage.format_usage()


@dataclass(slots=True)
class Workspace:
    """All panels of one signed-in identity."""

    session: SessionContext
    files: FilesPanel
    notes: NotesPanel
    photos: PhotosPanel
    tasks: TasksPanel
    expenses: ExpensesPanel

    def panels(self) -> dict[str, Any]:
        return {
            "files": self.files,
            "notes": self.notes,
            "photos": self.photos,
            "tasks": self.tasks,
            "expenses": self.expenses,
        }

    def refresh_all(self, *, max_workers: int = 5) -> dict[str, Result[Any]]:
        """Reload every panel concurrently and return each panel's load result."""
        panels = self.panels()
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="desuite-load") as pool:
            futures = {name: pool.submit(panel.refresh) for name, panel in panels.items()}
            return {name: future.result() for name, future in futures.items()}

    def dashboard(self) -> DashboardSummary:
        counts = {name: panel.count() for name, panel in self.panels().items()}
        return DashboardSummary(counts=counts, storage=self.files.usage())

    def close(self) -> None:
        for panel in self.panels().values():
            panel.close()


class WorkspaceManager:
    """
    High-level entry point: login -> workspace of panels -> logout.

    The manager owns exactly one SessionContext at a time and passes it
    explicitly to every panel it builds. Logging out closes the panels, so
    loads still in flight for the old identity are discarded.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        identity_store: Optional[IdentityStore] = None,
    ) -> None:
        self._settings = settings if settings is not None else Settings.load()
        self._backend = HttpBackend(self._settings)
        self._identity_store = identity_store or IdentityStore(self._settings.identity_file)
        self._workspace: Optional[Workspace] = None

    @classmethod
    def from_backend(
        cls,
        backend: Any,
        *,
        settings: Optional[Settings] = None,
        identity_store: Optional[IdentityStore] = None,
    ) -> "WorkspaceManager":
        """Create manager with an injected backend (useful for tests)."""
        obj = cls.__new__(cls)
        obj._settings = settings if settings is not None else Settings()
        obj._backend = backend
        obj._identity_store = identity_store or IdentityStore(obj._settings.identity_file)
        obj._workspace = None
        return obj

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def session(self) -> Optional[SessionContext]:
        return self._workspace.session if self._workspace is not None else None

    @property
    def workspace(self) -> Workspace:
        """Return the open workspace. Requires login() or restore() first."""
        require_identity(self.session)
        return self._workspace

    # ----------------------------
    # Identity lifecycle
    # ----------------------------
    def login(self, identity: Identity | str) -> Workspace:
        """
        Make *identity* current, persist it, and open its workspace.

        Any workspace of a previous identity is closed first.
        """
        if isinstance(identity, str):
            identity = Identity(identity)
        session = self._identity_store.login(identity)
        return self._open(session)

    def restore(self) -> Optional[Workspace]:
        """Reopen the workspace of the persisted identity, if there is one."""
        session = self._identity_store.restore()
        if session is None:
            return None
        return self._open(session)

    def logout(self) -> None:
        self._close_workspace()
        self._identity_store.logout()

    def close(self) -> None:
        """Release the workspace and the backend connection; the identity stays persisted."""
        self._close_workspace()
        close = getattr(self._backend, "close", None)
        if close is not None:
            close()

    # ----------------------------
    # Internals
    # ----------------------------
    def _open(self, session: SessionContext) -> Workspace:
        self._close_workspace()
        self._workspace = self._build(session)
        LOGGER.debug("Opened workspace for %s", session.principal)
        return self._workspace

    def _close_workspace(self) -> None:
        if self._workspace is not None:
            self._workspace.close()
            self._workspace = None

    def _build(self, session: SessionContext) -> Workspace:
        s = self._settings
        b = self._backend
        return Workspace(
            session=session,
            files=FilesPanel(
                b.files,
                session,
                page_size=s.page_size("files"),
                quota_bytes=s.quota_bytes,
                max_file_bytes=s.max_file_bytes,
            ),
            notes=NotesPanel(b.notes, session, page_size=s.page_size("notes")),
            photos=PhotosPanel(
                b.photos,
                b.albums,
                session,
                page_size=s.page_size("photos"),
                quota_bytes=s.quota_bytes,
            ),
            tasks=TasksPanel(b.tasks, session, page_size=s.page_size("tasks")),
            expenses=ExpensesPanel(b.expenses, session, page_size=s.page_size("expenses")),
        )


__all__ = ["WorkspaceManager", "Workspace", "DashboardSummary"]
