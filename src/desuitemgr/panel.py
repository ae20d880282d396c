"""Panels: one resource's store, view criteria, pages, summaries and actions."""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Generic, Optional, Sequence, TypeVar

from desuitemgr.codec import format_expenses, split_import_lines
from desuitemgr.controller import (
    EditForm,
    MutationController,
    expense_values,
    note_values,
    task_values,
)
from desuitemgr.errors import InvalidStateError, LocalValidationError
from desuitemgr.models import (
    ActionOutcome,
    AlbumRecord,
    ExpenseRecord,
    FileRecord,
    NoteRecord,
    PhotoRecord,
    Result,
    TaskRecord,
    TaskStatus,
)
from desuitemgr.remote import (
    AlbumCollaborator,
    ExpenseCollaborator,
    FileCollaborator,
    PhotoCollaborator,
    ResourceCollaborator,
)
from desuitemgr.session import SessionContext
from desuitemgr.store import CachedStore, ResourceStore
from desuitemgr.validation import (
    validate_album_name,
    validate_expense_fields,
    validate_file_upload,
    validate_note_fields,
    validate_photo_upload,
    validate_task_fields,
)
from desuitemgr.view import (
    EXPENSES_ALL,
    FILES_BY_RECENCY,
    NOTES_BY_RECENCY,
    PHOTOS_BY_RECENCY,
    TASKS_BY_DUE_DATE,
    Criteria,
    Page,
    Paginator,
    StorageUsage,
    category_shares,
    category_totals,
    derive,
    total,
)

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class ResourcePanel(Generic[T]):
    """
    Composes the pieces every resource view needs.

    store -> derive(criteria) -> paginator (display) / aggregator (summaries);
    user actions go through the controller, which reloads the store on success.
    """

    def __init__(
        self,
        collaborator: ResourceCollaborator[T],
        session: SessionContext,
        *,
        noun: str,
        plural: str,
        page_size: int,
        criteria: Criteria,
        validator: Optional[Callable[..., dict[str, Any]]] = None,
        to_values: Optional[Callable[[T], dict[str, Any]]] = None,
        dependents: Sequence[CachedStore[Any]] = (),
    ) -> None:
        self._collaborator = collaborator
        self._session = session
        self.store: ResourceStore[T] = ResourceStore(self._load, name=plural)
        self.controller: MutationController[T] = MutationController(
            collaborator,
            self.store,
            session,
            noun=noun,
            validator=validator,
            dependents=dependents,
        )
        self.paginator = Paginator(page_size)
        self.form: Optional[EditForm] = EditForm(to_values) if to_values else None
        self._criteria = criteria

    # ----------------------------
    # Loading
    # ----------------------------
    def _load(self, session: SessionContext) -> Result[list[T]]:
        return self._collaborator.list(session)

    def refresh(self) -> Result[list[T]]:
        """Reload the list; a successful load also clears the last action error."""
        result = self.store.load(self._session)
        if result.is_ok:
            self.controller.clear_error()
        return result

    def close(self) -> None:
        """Detach from the view; loads still in flight are discarded."""
        self.store.close()

    # ----------------------------
    # View
    # ----------------------------
    @property
    def session(self) -> SessionContext:
        return self._session

    @property
    def criteria(self) -> Criteria:
        return self._criteria

    def set_criteria(self, criteria: Criteria) -> None:
        self._criteria = criteria
        self.paginator.reset()

    def derived(self) -> list[T]:
        return derive(self.store.records, self._criteria)

    def page(self) -> Page[T]:
        """The current page of the derived view (page index re-clamped)."""
        return self.paginator.show(self.derived())

    def count(self) -> int:
        return len(self.store)

    @property
    def loading(self) -> bool:
        return self.store.loading

    @property
    def error(self) -> Optional[str]:
        """Banner text: the last action error, else the last load error."""
        if self.controller.last_error:
            return self.controller.last_error
        if self.store.error is not None:
            return self.store.error.message
        return None

    # ----------------------------
    # Actions
    # ----------------------------
    def create(self, fields: dict[str, Any]) -> ActionOutcome:
        return self.controller.create(fields)

    def update(self, record_id: int, fields: dict[str, Any]) -> ActionOutcome:
        return self.controller.update(record_id, fields)

    def delete(self, record_id: int) -> ActionOutcome:
        return self.controller.delete(record_id)

    def submit_form(self) -> ActionOutcome:
        if self.form is None:
            raise InvalidStateError(f"{self.store.name} have no edit form")
        return self.form.submit(self.controller)


class NotesPanel(ResourcePanel[NoteRecord]):
    def __init__(self, collaborator: ResourceCollaborator[NoteRecord], session: SessionContext, *, page_size: int) -> None:
        super().__init__(
            collaborator,
            session,
            noun="note",
            plural="notes",
            page_size=page_size,
            criteria=NOTES_BY_RECENCY,
            validator=validate_note_fields,
            to_values=note_values,
        )


class TasksPanel(ResourcePanel[TaskRecord]):
    def __init__(self, collaborator: ResourceCollaborator[TaskRecord], session: SessionContext, *, page_size: int) -> None:
        super().__init__(
            collaborator,
            session,
            noun="task",
            plural="tasks",
            page_size=page_size,
            criteria=TASKS_BY_DUE_DATE,
            validator=validate_task_fields,
            to_values=task_values,
        )

    def filter_status(self, status: TaskStatus | str) -> None:
        """Show only tasks in *status*; pass ALL to show every task."""
        self.set_criteria(self.criteria.with_category("status", status))

    def status_counts(self) -> dict[TaskStatus, int]:
        counts = {status: 0 for status in TaskStatus}
        for task in self.store.records:
            counts[task.status] += 1
        return counts


class ExpensesPanel(ResourcePanel[ExpenseRecord]):
    def __init__(self, collaborator: ExpenseCollaborator, session: SessionContext, *, page_size: int) -> None:
        super().__init__(
            collaborator,
            session,
            noun="expense",
            plural="expenses",
            page_size=page_size,
            criteria=EXPENSES_ALL,
            validator=validate_expense_fields,
            to_values=expense_values,
        )
        self._expenses = collaborator

    def filter_category(self, category: str) -> None:
        self.set_criteria(self.criteria.with_category("category", category))

    def filter_dates(
        self,
        start: Optional[date | datetime] = None,
        end: Optional[date | datetime] = None,
    ) -> None:
        self.set_criteria(self.criteria.with_date_range("date", start, end))

    def categories(self) -> list[str]:
        """Distinct categories present in the cache, sorted case-insensitively."""
        seen = {e.category.casefold(): e.category for e in self.store.records}
        return [seen[key] for key in sorted(seen)]

    def total_amount(self) -> Decimal:
        return Decimal(total(self.derived(), lambda e: e.amount))

    def category_totals(self) -> dict[str, Decimal]:
        return category_totals(self.derived())

    def category_shares(self) -> dict[str, float]:
        return category_shares(self.derived())

    def import_text(self, text: str) -> ActionOutcome:
        """Hand the non-empty lines of *text* to the collaborator's importer."""
        lines = split_import_lines(text)
        if not lines:
            return self.controller.reject_locally(
                "import", LocalValidationError("The selected file is empty.")
            )
        return self.controller.run(
            "import", lambda: self._expenses.import_expenses(self.session, lines)
        )

    def export_text(self) -> ActionOutcome:
        """Ask the collaborator for its export; the text is in outcome.value."""
        return self.controller.run(
            "export", lambda: self._expenses.export_expenses(self.session), reload=False
        )

    def export_cached(self) -> str:
        """Render the cached expenses locally in the import format."""
        return format_expenses(self.store.records)


class FilesPanel(ResourcePanel[FileRecord]):
    def __init__(
        self,
        collaborator: FileCollaborator,
        session: SessionContext,
        *,
        page_size: int,
        quota_bytes: int,
        max_file_bytes: int,
    ) -> None:
        self.usage_store: CachedStore[int] = CachedStore(
            collaborator.storage_usage, 0, name="storage usage"
        )
        super().__init__(
            collaborator,
            session,
            noun="file",
            plural="files",
            page_size=page_size,
            criteria=FILES_BY_RECENCY,
            dependents=(self.usage_store,),
        )
        self._files = collaborator
        self._quota_bytes = quota_bytes
        self._max_file_bytes = max_file_bytes

    def refresh(self) -> Result[list[FileRecord]]:
        result = super().refresh()
        self.usage_store.load(self.session)
        return result

    def close(self) -> None:
        super().close()
        self.usage_store.close()

    def usage(self) -> StorageUsage:
        return StorageUsage(self.usage_store.value, self._quota_bytes)

    def upload(self, name: str, content_type: str, data: bytes) -> ActionOutcome:
        try:
            validate_file_upload(
                len(data),
                self.usage_store.value,
                max_file_bytes=self._max_file_bytes,
                quota_bytes=self._quota_bytes,
            )
        except LocalValidationError as exc:
            return self.controller.reject_locally("upload", exc)
        return self.controller.run(
            "upload",
            lambda: self._files.upload_file(self.session, name, content_type, data),
        )

    def download(self, record_id: int) -> ActionOutcome:
        """File bytes are in outcome.value on success."""
        return self.controller.run(
            "download",
            lambda: self._files.download_file(self.session, record_id),
            reload=False,
        )


class PhotosPanel(ResourcePanel[PhotoRecord]):
    """
    Photos of the main gallery or of one album, plus the album list.

    Deleting the album being viewed returns the panel to the main gallery.
    """

    def __init__(
        self,
        collaborator: PhotoCollaborator,
        albums: AlbumCollaborator,
        session: SessionContext,
        *,
        page_size: int,
        quota_bytes: int,
    ) -> None:
        self._photos = collaborator
        self._albums = albums
        self._album_id: Optional[int] = None
        self.usage_store: CachedStore[int] = CachedStore(
            collaborator.storage_usage, 0, name="storage usage"
        )
        super().__init__(
            collaborator,
            session,
            noun="photo",
            plural="photos",
            page_size=page_size,
            criteria=PHOTOS_BY_RECENCY,
            dependents=(self.usage_store,),
        )
        self.albums_store: ResourceStore[AlbumRecord] = ResourceStore(albums.list, name="albums")
        self.album_controller: MutationController[AlbumRecord] = MutationController(
            albums, self.albums_store, session, noun="album"
        )
        self._quota_bytes = quota_bytes

    def _load(self, session: SessionContext) -> Result[list[PhotoRecord]]:
        if self._album_id is None:
            return self._photos.list(session)
        return self._photos.list_in_album(session, self._album_id)

    @property
    def album_id(self) -> Optional[int]:
        return self._album_id

    @property
    def error(self) -> Optional[str]:
        return self.album_controller.last_error or super().error

    def refresh(self) -> Result[list[PhotoRecord]]:
        result = super().refresh()
        if result.is_ok:
            self.album_controller.clear_error()
        self.albums_store.load(self.session)
        self.usage_store.load(self.session)
        return result

    def close(self) -> None:
        super().close()
        self.albums_store.close()
        self.usage_store.close()

    def open_album(self, album_id: Optional[int]) -> Result[list[PhotoRecord]]:
        """Switch to *album_id* (None for the main gallery) and reload photos."""
        LOGGER.debug("Showing photos of album %s", album_id)
        self._album_id = album_id
        self.paginator.reset()
        return self.store.load(self.session)

    def usage(self) -> StorageUsage:
        return StorageUsage(self.usage_store.value, self._quota_bytes)

    def upload(self, name: str, content_type: str, data: bytes) -> ActionOutcome:
        try:
            validate_photo_upload(
                content_type,
                len(data),
                self.usage_store.value,
                quota_bytes=self._quota_bytes,
            )
        except LocalValidationError as exc:
            return self.controller.reject_locally("upload", exc)
        album_id = self._album_id
        return self.controller.run(
            "upload",
            lambda: self._photos.upload_photo(self.session, name, content_type, data, album_id),
        )

    def create_album(self, name: str) -> ActionOutcome:
        try:
            clean = validate_album_name(name)
        except LocalValidationError as exc:
            return self.album_controller.reject_locally("create", exc)
        return self.album_controller.run(
            "create", lambda: self._albums.create_album(self.session, clean)
        )

    def delete_album(self, album_id: int) -> ActionOutcome:
        """Delete an album; its photos go back to the main gallery."""
        outcome = self.album_controller.run(
            "delete",
            lambda: self._albums.delete_album(self.session, album_id),
            forget_id=album_id,
            reload=False,
        )
        if outcome.succeeded:
            self.albums_store.load(self.session)
            if self._album_id == album_id:
                LOGGER.debug("Album %s deleted while open, back to main gallery", album_id)
                self._album_id = None
                self.paginator.reset()
            self.store.load(self.session)
        return outcome


__all__ = [
    "ResourcePanel",
    "NotesPanel",
    "TasksPanel",
    "ExpensesPanel",
    "FilesPanel",
    "PhotosPanel",
]
