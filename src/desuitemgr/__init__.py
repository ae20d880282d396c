"""desuitemgr public API."""

from __future__ import annotations

from desuitemgr.config import Settings
from desuitemgr.controller import EditForm, MutationController
from desuitemgr.errors import (
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
    map_http_error,
)
from desuitemgr.manager import DashboardSummary, Workspace, WorkspaceManager
from desuitemgr.models import (
    ActionOutcome,
    AlbumRecord,
    Err,
    ExpenseRecord,
    FileRecord,
    Identity,
    NoteRecord,
    Ok,
    PhotoRecord,
    Result,
    TaskRecord,
    TaskStatus,
)
from desuitemgr.panel import ExpensesPanel, FilesPanel, NotesPanel, PhotosPanel, ResourcePanel, TasksPanel
from desuitemgr.remote import HttpBackend
from desuitemgr.session import IdentityStore, SessionContext
from desuitemgr.store import ResourceStore
from desuitemgr.view import ALL, Criteria, Page, Paginator, StorageUsage, derive, paginate

__all__ = [
    # High-level
    "WorkspaceManager",
    "Workspace",
    "DashboardSummary",
    "ResourcePanel",
    "FilesPanel",
    "NotesPanel",
    "PhotosPanel",
    "TasksPanel",
    "ExpensesPanel",
    # Building blocks
    "ResourceStore",
    "MutationController",
    "EditForm",
    "Criteria",
    "ALL",
    "derive",
    "Page",
    "Paginator",
    "paginate",
    "StorageUsage",
    # Session / config / transport
    "Identity",
    "SessionContext",
    "IdentityStore",
    "Settings",
    "HttpBackend",
    # Models
    "FileRecord",
    "NoteRecord",
    "PhotoRecord",
    "AlbumRecord",
    "TaskRecord",
    "TaskStatus",
    "ExpenseRecord",
    "Ok",
    "Err",
    "Result",
    "ActionOutcome",
    # Errors
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
    "map_http_error",
]
