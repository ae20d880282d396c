"""State machine for the create/edit dialogs."""

from __future__ import annotations

from typing import Any, Callable, Literal, Mapping, Optional

from desuitemgr.errors import InvalidStateError
from desuitemgr.models import ActionOutcome

from .mutation import MutationController

FormState = Literal["closed", "creating", "editing"]


class EditForm:
    """
    One editable form: closed -> creating | editing(record_id) -> closed.

    Notes:
        - open_edit() pre-fills the values from the record being edited.
        - A successful submit closes the form; any other outcome keeps it open
          with an inline error.
        - Transitions that make no sense (submitting a closed form, opening an
          already open one) raise InvalidStateError.
    """

    def __init__(
        self,
        to_values: Callable[[Any], dict[str, Any]],
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._to_values = to_values
        self._defaults = dict(defaults or {})
        self._state: FormState = "closed"
        self._record_id: Optional[int] = None
        self._values: dict[str, Any] = {}
        self._error: Optional[str] = None

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state != "closed"

    @property
    def record_id(self) -> Optional[int]:
        """Id of the record being edited; None unless state == "editing"."""
        return self._record_id

    @property
    def values(self) -> dict[str, Any]:
        return dict(self._values)

    @property
    def error(self) -> Optional[str]:
        return self._error

    # ----------------------------
    # Transitions
    # ----------------------------
    def open_new(self) -> None:
        self._require_state("closed", "open a new form")
        self._state = "creating"
        self._record_id = None
        self._values = dict(self._defaults)
        self._error = None

    def open_edit(self, record: Any) -> None:
        self._require_state("closed", "edit a record")
        if getattr(record, "id", None) is None:
            raise InvalidStateError("Cannot edit a record that has no id")
        self._state = "editing"
        self._record_id = record.id
        self._values = self._to_values(record)
        self._error = None

    def cancel(self) -> None:
        self._close()

    def set(self, name: str, value: Any) -> None:
        if not self.is_open:
            raise InvalidStateError("Form is closed")
        self._values[name] = value

    def update(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            self.set(name, value)

    def submit(self, controller: MutationController[Any]) -> ActionOutcome:
        if self._state == "creating":
            outcome = controller.create(self._values)
        elif self._state == "editing":
            if self._record_id is None:
                raise InvalidStateError("Cannot submit an edit without a record id")
            outcome = controller.update(self._record_id, self._values)
        else:
            raise InvalidStateError("Cannot submit a closed form")

        if outcome.succeeded:
            self._close()
        else:
            self._error = outcome.message
        return outcome

    # ----------------------------
    # Internals
    # ----------------------------
    def _close(self) -> None:
        self._state = "closed"
        self._record_id = None
        self._values = {}
        self._error = None

    def _require_state(self, expected: FormState, action: str) -> None:
        if self._state != expected:
            raise InvalidStateError(
                f"Cannot {action} while the form is {self._state}",
                details={"state": self._state},
            )


def note_values(record: Any) -> dict[str, Any]:
    return {"title": record.title, "content": record.content}


def task_values(record: Any) -> dict[str, Any]:
    return {
        "title": record.title,
        "description": record.description,
        "status": record.status,
        "due_date": record.due_date,
    }


def expense_values(record: Any) -> dict[str, Any]:
    return {
        "amount": record.amount,
        "category": record.category,
        "description": record.description,
        "date": record.date,
    }
