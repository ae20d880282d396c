import unittest
from dataclasses import dataclass

from desuitemgr.controller import EditForm, MutationController, note_values
from desuitemgr.errors import InvalidStateError
from desuitemgr.models import Err, Identity, Ok
from desuitemgr.session import SessionContext
from desuitemgr.store import ResourceStore
from desuitemgr.validation import validate_note_fields


@dataclass(frozen=True)
class Note:
    id: int
    title: str
    content: str


class Notes:
    def __init__(self) -> None:
        self.created = []
        self.updated = []
        self.reject_with = None

    def list(self, session):
        return Ok([])

    def create(self, session, fields):
        if self.reject_with:
            return Err(self.reject_with)
        self.created.append(dict(fields))
        return Ok(1)

    def update(self, session, record_id, fields):
        self.updated.append((record_id, dict(fields)))
        return Ok(None)


class TestEditForm(unittest.TestCase):
    def setUp(self) -> None:
        self.notes = Notes()
        session = SessionContext(Identity("alice"))
        self.controller = MutationController(
            self.notes,
            ResourceStore(self.notes.list),
            session,
            noun="note",
            validator=validate_note_fields,
        )
        self.form = EditForm(note_values, defaults={"title": "", "content": ""})

    def test_starts_closed(self) -> None:
        self.assertEqual(self.form.state, "closed")
        self.assertFalse(self.form.is_open)
        with self.assertRaises(InvalidStateError):
            self.form.submit(self.controller)
        with self.assertRaises(InvalidStateError):
            self.form.set("title", "x")

    def test_create_success_closes(self) -> None:
        self.form.open_new()
        self.assertEqual(self.form.state, "creating")
        self.assertEqual(self.form.values, {"title": "", "content": ""})
        self.form.update({"title": "t", "content": "c"})

        outcome = self.form.submit(self.controller)
        self.assertTrue(outcome.succeeded)
        self.assertEqual(self.form.state, "closed")
        self.assertEqual(self.notes.created, [{"title": "t", "content": "c"}])

    def test_invalid_submit_stays_open_with_error(self) -> None:
        self.form.open_new()
        outcome = self.form.submit(self.controller)
        self.assertEqual(outcome.status, "invalid")
        self.assertEqual(self.form.state, "creating")
        self.assertEqual(self.form.error, "Note title and content cannot be empty.")

    def test_rejected_submit_stays_open(self) -> None:
        self.notes.reject_with = "Quota exceeded"
        self.form.open_new()
        self.form.update({"title": "t", "content": "c"})
        self.form.submit(self.controller)
        self.assertTrue(self.form.is_open)
        self.assertEqual(self.form.error, "Error creating note: Quota exceeded")

    def test_edit_prefills_and_updates(self) -> None:
        self.form.open_edit(Note(5, "old", "body"))
        self.assertEqual(self.form.state, "editing")
        self.assertEqual(self.form.record_id, 5)
        self.assertEqual(self.form.values, {"title": "old", "content": "body"})

        self.form.set("title", "new")
        self.form.submit(self.controller)
        self.assertEqual(self.notes.updated, [(5, {"title": "new", "content": "body"})])
        self.assertIsNone(self.form.record_id)

    def test_cannot_open_twice(self) -> None:
        self.form.open_new()
        with self.assertRaises(InvalidStateError):
            self.form.open_edit(Note(1, "a", "b"))

    def test_edit_requires_record_id(self) -> None:
        with self.assertRaises(InvalidStateError):
            self.form.open_edit(Note(None, "a", "b"))  # type: ignore[arg-type]
        self.assertEqual(self.form.state, "closed")
        self.assertEqual(self.notes.updated, [])

    def test_cancel(self) -> None:
        self.form.open_edit(Note(1, "a", "b"))
        self.form.cancel()
        self.assertEqual(self.form.state, "closed")
        self.assertEqual(self.form.values, {})


if __name__ == "__main__":
    unittest.main()
