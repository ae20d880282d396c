"""Contracts the library expects from remote collaborators."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, TypeVar

from desuitemgr.models import AlbumRecord, ExpenseRecord, FileRecord, PhotoRecord, Result
from desuitemgr.session import SessionContext

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class ListSource(Protocol[T_co]):
    """Anything a ResourceStore can load from."""

    def list(self, session: SessionContext) -> Result[list[T_co]]: ...


class ResourceCollaborator(ListSource[T], Protocol[T]):
    """
    CRUD contract shared by every resource.

    Every method returns Ok/Err. Transport failures raise TransportError.
    """

    def get(self, session: SessionContext, record_id: int) -> Result[T]: ...

    def create(self, session: SessionContext, fields: Mapping[str, Any]) -> Result[int]: ...

    def update(
        self, session: SessionContext, record_id: int, fields: Mapping[str, Any]
    ) -> Result[None]: ...

    def delete(self, session: SessionContext, record_id: int) -> Result[None]: ...


class StorageUsageSource(Protocol):
    def storage_usage(self, session: SessionContext) -> Result[int]: ...


class FileCollaborator(ResourceCollaborator[FileRecord], StorageUsageSource, Protocol):
    def upload_file(
        self, session: SessionContext, name: str, content_type: str, data: bytes
    ) -> Result[int]: ...

    def download_file(self, session: SessionContext, record_id: int) -> Result[bytes]: ...


class PhotoCollaborator(ResourceCollaborator[PhotoRecord], StorageUsageSource, Protocol):
    def upload_photo(
        self,
        session: SessionContext,
        name: str,
        content_type: str,
        data: bytes,
        album_id: int | None = None,
    ) -> Result[int]: ...

    def list_in_album(self, session: SessionContext, album_id: int) -> Result[list[PhotoRecord]]: ...


class AlbumCollaborator(ListSource[AlbumRecord], Protocol):
    def create_album(self, session: SessionContext, name: str) -> Result[int]: ...

    def delete_album(self, session: SessionContext, album_id: int) -> Result[None]: ...


class ExpenseCollaborator(ResourceCollaborator[ExpenseRecord], Protocol):
    def import_expenses(self, session: SessionContext, lines: list[str]) -> Result[int]: ...

    def export_expenses(self, session: SessionContext) -> Result[str]: ...
