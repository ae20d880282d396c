"""Public model exports for desuitemgr."""

from __future__ import annotations

from .records import (
    AlbumRecord,
    ExpenseRecord,
    FileRecord,
    Identity,
    NoteRecord,
    PhotoRecord,
    TaskRecord,
    TaskStatus,
)
from .results import ActionOutcome, Err, Ok, OutcomeStatus, Result, result_from_payload

__all__ = [
    "Identity",
    "FileRecord",
    "NoteRecord",
    "AlbumRecord",
    "PhotoRecord",
    "TaskRecord",
    "TaskStatus",
    "ExpenseRecord",
    "Ok",
    "Err",
    "Result",
    "result_from_payload",
    "ActionOutcome",
    "OutcomeStatus",
]
