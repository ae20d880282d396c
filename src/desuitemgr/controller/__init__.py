"""User-action orchestration for desuitemgr."""

from __future__ import annotations

from .form import EditForm, FormState, expense_values, note_values, task_values
from .mutation import MutationController

__all__ = [
    "MutationController",
    "EditForm",
    "FormState",
    "note_values",
    "task_values",
    "expense_values",
]
