"""Data model for workspace records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class TaskStatus(str, Enum):
    """Closed set of task states. Values are the backend's variant tags."""

    TODO = "todo"
    IN_PROGRESS = "inProgress"
    DONE = "done"

    @classmethod
    def from_wire(cls, value: Any) -> "TaskStatus":
        """
        Parse a status from the backend.

        Accepts the bare tag (``"done"``) or the single-key variant object
        (``{"done": null}``). Anything else raises ValueError.
        """
        if isinstance(value, dict):
            if len(value) != 1:
                raise ValueError(f"Task status must have exactly one tag: {value!r}")
            (value,) = value.keys()
        return cls(value)

    def to_wire(self) -> dict[str, None]:
        return {self.value: None}


@dataclass(slots=True, frozen=True)
class Identity:
    """The authenticated user whose records are being viewed."""

    principal: str

    def __post_init__(self) -> None:
        if not isinstance(self.principal, str) or not self.principal.strip():
            raise ValueError("Identity.principal must be a non-empty string")


@dataclass(slots=True, frozen=True)
class FileRecord:
    """A stored file. Size is in bytes and never changes after upload."""

    id: int
    name: str
    content_type: str
    size: int
    created_at: datetime


@dataclass(slots=True, frozen=True)
class NoteRecord:
    id: int
    title: str
    content: str
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True, frozen=True)
class AlbumRecord:
    id: int
    name: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class PhotoRecord:
    """
    A stored photo.

    Notes:
        - album_id is a back-reference to an AlbumRecord; the album does not
          own the photo (deleting an album leaves its photos in the gallery).
    """

    id: int
    name: str
    content_type: str
    data: bytes
    created_at: datetime
    size: int
    album_id: Optional[int] = None


@dataclass(slots=True, frozen=True)
class TaskRecord:
    id: int
    title: str
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime
    owner: str
    due_date: Optional[datetime] = None


@dataclass(slots=True, frozen=True)
class ExpenseRecord:
    """An expense entry. Amount is non-negative by convention only."""

    id: int
    amount: Decimal
    category: str
    description: str
    date: datetime
