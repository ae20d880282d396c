import base64
import unittest
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import Mock

import requests

from desuitemgr.config import Settings
from desuitemgr.errors import NetworkError, ServerError
from desuitemgr.models import Err, Identity, Ok, TaskStatus
from desuitemgr.remote import HttpBackend
from desuitemgr.remote.http_backend import IDENTITY_HEADER
from desuitemgr.session import SessionContext
from desuitemgr.util.time import to_epoch_millis, to_epoch_nanos

DT = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
NANOS = to_epoch_nanos(DT)


def _response(status_code: int, payload=None, *, reason: str = "") -> Mock:
    resp = Mock()
    resp.status_code = status_code
    resp.reason = reason
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload
    return resp


class TestHttpBackend(unittest.TestCase):
    def setUp(self) -> None:
        self.http = Mock()
        self.backend = HttpBackend.from_session(self.http, base_url="http://api.test/")
        self.session = SessionContext(Identity("alice"))

    def _answer(self, status_code: int, payload=None, **kwargs) -> None:
        self.http.request.return_value = _response(status_code, payload, **kwargs)

    def test_request_carries_identity_and_timeout(self) -> None:
        self._answer(200, {"ok": []})
        self.backend.notes.list(self.session)

        args, kwargs = self.http.request.call_args
        self.assertEqual(args, ("GET", "http://api.test/notes"))
        self.assertEqual(kwargs["headers"], {IDENTITY_HEADER: "alice"})
        self.assertEqual(kwargs["timeout"], 30.0)

    def test_list_decodes_records(self) -> None:
        self._answer(
            200,
            {
                "ok": [
                    {
                        "id": 3,
                        "title": "Plan",
                        "description": "",
                        "status": {"inProgress": None},
                        "createdAt": NANOS,
                        "updatedAt": NANOS,
                        "owner": "alice",
                        "dueDate": [NANOS],
                    },
                    {
                        "id": 4,
                        "title": "Later",
                        "status": "todo",
                        "createdAt": NANOS,
                        "updatedAt": NANOS,
                        "dueDate": [],
                    },
                ]
            },
        )
        result = self.backend.tasks.list(self.session)
        self.assertIsInstance(result, Ok)
        first, second = result.value
        self.assertIs(first.status, TaskStatus.IN_PROGRESS)
        self.assertEqual(first.due_date, DT)
        self.assertEqual(first.created_at, DT)
        self.assertIsNone(second.due_date)

    def test_expense_dates_are_millis(self) -> None:
        self._answer(
            200,
            {"ok": [{"id": 1, "amount": 12.5, "category": "Food", "date": to_epoch_millis(DT)}]},
        )
        (expense,) = self.backend.expenses.list(self.session).value
        self.assertEqual(expense.amount, Decimal("12.5"))
        self.assertEqual(expense.date, DT)
        self.assertEqual(expense.description, "")

    def test_err_payload_is_rejection(self) -> None:
        self._answer(200, {"err": "Note not found"})
        self.assertEqual(self.backend.notes.delete(self.session, 9), Err("Note not found"))

    def test_4xx_is_rejection(self) -> None:
        self._answer(404, ValueError("no body"), reason="Not Found")
        self.assertEqual(self.backend.notes.get(self.session, 9), Err("not found"))

        self._answer(413, {"err": "Storage quota exceeded"})
        result = self.backend.files.upload_file(self.session, "a.txt", "text/plain", b"x")
        self.assertEqual(result, Err("Storage quota exceeded"))

    def test_5xx_raises_server_error(self) -> None:
        self._answer(503, ValueError("html"), reason="Service Unavailable")
        with self.assertRaises(ServerError) as ctx:
            self.backend.notes.list(self.session)
        self.assertEqual(ctx.exception.details["status_code"], 503)

    def test_429_raises_network_error(self) -> None:
        self._answer(429, None)
        with self.assertRaises(NetworkError):
            self.backend.notes.list(self.session)

    def test_connection_error_raises_network_error(self) -> None:
        self.http.request.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(NetworkError) as ctx:
            self.backend.notes.list(self.session)
        self.assertIsInstance(ctx.exception.cause, requests.ConnectionError)

    def test_unreadable_success_body_raises_server_error(self) -> None:
        self._answer(200, ValueError("not json"))
        with self.assertRaises(ServerError):
            self.backend.notes.list(self.session)

        self._answer(200, {"value": 1})
        with self.assertRaises(ServerError):
            self.backend.notes.list(self.session)

    def test_malformed_record_raises_server_error(self) -> None:
        self._answer(200, {"ok": [{"id": 1, "title": "x"}]})
        with self.assertRaises(ServerError) as ctx:
            self.backend.notes.list(self.session)
        self.assertEqual(ctx.exception.details["resource"], "notes")

    def test_create_returns_id_and_encodes_body(self) -> None:
        self._answer(200, {"ok": 17})
        result = self.backend.tasks.create(
            self.session,
            {"title": "t", "description": "d", "due_date": DT, "status": TaskStatus.DONE},
        )
        self.assertEqual(result, Ok(17))

        args, kwargs = self.http.request.call_args
        self.assertEqual(args, ("POST", "http://api.test/tasks"))
        self.assertEqual(
            kwargs["json"],
            {"title": "t", "description": "d", "dueDate": NANOS, "status": {"done": None}},
        )

    def test_create_with_non_integer_id_raises(self) -> None:
        self._answer(200, {"ok": "abc"})
        with self.assertRaises(ServerError):
            self.backend.notes.create(self.session, {"title": "t", "content": "c"})

    def test_expense_body(self) -> None:
        self._answer(200, {"ok": None})
        self.backend.expenses.update(
            self.session,
            4,
            {"amount": Decimal("9.99"), "category": "Food", "description": "", "date": DT},
        )
        args, kwargs = self.http.request.call_args
        self.assertEqual(args, ("PUT", "http://api.test/expenses/4"))
        self.assertEqual(kwargs["json"]["amount"], 9.99)
        self.assertEqual(kwargs["json"]["date"], to_epoch_millis(DT))

    def test_file_upload_and_download(self) -> None:
        self._answer(200, {"ok": 2})
        self.backend.files.upload_file(self.session, "a.bin", "application/octet-stream", b"\x00\x01")
        body = self.http.request.call_args.kwargs["json"]
        self.assertEqual(body["contentType"], "application/octet-stream")
        self.assertEqual(base64.b64decode(body["data"]), b"\x00\x01")

        self._answer(200, {"ok": base64.b64encode(b"hello").decode("ascii")})
        self.assertEqual(self.backend.files.download_file(self.session, 2), Ok(b"hello"))
        self.assertEqual(self.http.request.call_args.args[1], "http://api.test/files/2/content")

    def test_storage_usage(self) -> None:
        self._answer(200, {"ok": 4096})
        self.assertEqual(self.backend.files.storage_usage(self.session), Ok(4096))

    def test_photos_in_album(self) -> None:
        self._answer(
            200,
            {
                "ok": [
                    {
                        "id": 1,
                        "name": "p.png",
                        "contentType": "image/png",
                        "data": [1, 2, 3],
                        "createdAt": NANOS,
                        "size": 3,
                        "albumId": [5],
                    }
                ]
            },
        )
        (photo,) = self.backend.photos.list_in_album(self.session, 5).value
        self.assertEqual(photo.album_id, 5)
        self.assertEqual(photo.data, b"\x01\x02\x03")
        self.assertEqual(self.http.request.call_args.kwargs["params"], {"album": 5})

    def test_album_create_and_delete(self) -> None:
        self._answer(200, {"ok": 8})
        self.assertEqual(self.backend.albums.create_album(self.session, "Trip"), Ok(8))
        self.assertEqual(self.http.request.call_args.kwargs["json"], {"name": "Trip"})

        self._answer(200, {"ok": None})
        self.assertEqual(self.backend.albums.delete_album(self.session, 8), Ok(None))
        self.assertEqual(self.http.request.call_args.args, ("DELETE", "http://api.test/albums/8"))

    def test_expense_import_export(self) -> None:
        self._answer(200, {"ok": 2})
        self.assertEqual(self.backend.expenses.import_expenses(self.session, ["a", "b"]), Ok(2))
        self.assertEqual(self.http.request.call_args.kwargs["json"], {"lines": ["a", "b"]})

        self._answer(200, {"ok": "amount,category\n"})
        self.assertEqual(self.backend.expenses.export_expenses(self.session), Ok("amount,category\n"))

    def test_constructor_uses_settings(self) -> None:
        backend = HttpBackend(Settings({"backend": {"base_url": "http://x.test/", "timeout_sec": 2}}))
        try:
            self.assertIsInstance(backend._http, requests.Session)
            self.assertEqual(backend._base_url, "http://x.test")
            self.assertEqual(backend._timeout, 2.0)
        finally:
            backend.close()


if __name__ == "__main__":
    unittest.main()
