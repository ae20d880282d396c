"""HTTP/JSON collaborator for the workspace backend."""

from __future__ import annotations

import base64
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

import requests

from desuitemgr.config import Settings
from desuitemgr.errors import (
    REJECTION,
    HttpErrorInfo,
    NetworkError,
    ServerError,
    classify_http_error,
    map_http_error,
    rejection_message,
)
from desuitemgr.models import (
    AlbumRecord,
    Err,
    ExpenseRecord,
    FileRecord,
    NoteRecord,
    Ok,
    PhotoRecord,
    Result,
    TaskRecord,
    TaskStatus,
    result_from_payload,
)
from desuitemgr.session import SessionContext
from desuitemgr.util.time import (
    from_epoch_millis,
    from_epoch_nanos,
    to_epoch_millis,
    to_epoch_nanos,
)

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

IDENTITY_HEADER = "X-Identity"


class HttpBackend:
    """
    JSON-over-HTTP client for the workspace backend.

    Notes:
        - Every endpoint answers with ``{"ok": value}`` or ``{"err": message}``.
        - 4xx answers are business rejections and come back as Err.
        - Connection failures, timeouts and 5xx raise TransportError.
        - No retries: callers decide whether to try again.
    """

    def __init__(self, settings: Settings) -> None:
        self._base_url = settings.base_url
        self._timeout = settings.timeout_sec
        self._http = requests.Session()
        self._http.headers.update({"Accept": "application/json"})
        self._init_resources()

    @classmethod
    def from_session(
        cls,
        http: Any,
        *,
        base_url: str = "http://backend.invalid",
        timeout_sec: float = 30.0,
    ) -> "HttpBackend":
        """Create backend from a pre-built requests-like session (useful for tests)."""
        obj = cls.__new__(cls)
        obj._base_url = base_url.rstrip("/")
        obj._timeout = timeout_sec
        obj._http = http
        obj._init_resources()
        return obj

    def _init_resources(self) -> None:
        self.files = FileResource(self)
        self.notes = HttpResource(self, "notes", _note_from_dict, _encode_note)
        self.photos = PhotoResource(self)
        self.albums = AlbumResource(self)
        self.tasks = HttpResource(self, "tasks", _task_from_dict, _encode_task)
        self.expenses = ExpenseResource(self)

    def close(self) -> None:
        self._http.close()

    # ----------------------------
    # Transport
    # ----------------------------
    def call(
        self,
        method: str,
        path: str,
        session: SessionContext,
        *,
        body: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Result[Any]:
        """Issue one request and translate the answer into Ok/Err."""
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            resp = self._http.request(
                method,
                url,
                json=dict(body) if body is not None else None,
                params=dict(params) if params is not None else None,
                headers={IDENTITY_HEADER: session.principal},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError(
                "Backend unreachable",
                details={"method": method, "path": path},
                cause=exc,
            ) from exc

        status = resp.status_code
        if 200 <= status <= 299:
            try:
                return result_from_payload(resp.json())
            except ValueError as exc:
                raise ServerError(
                    "Unreadable backend response",
                    details={"method": method, "path": path, "status_code": status},
                    cause=exc,
                ) from exc

        info = _response_to_info(resp)
        if classify_http_error(info) == REJECTION:
            message = rejection_message(info)
            LOGGER.info("%s %s rejected (%s): %s", method, path, status, message)
            return Err(message)
        raise map_http_error(info)


class HttpResource(Generic[T]):
    """CRUD endpoints for one resource collection under ``/<name>``."""

    def __init__(
        self,
        backend: HttpBackend,
        name: str,
        decode: Callable[[dict[str, Any]], T],
        encode: Callable[[Mapping[str, Any]], dict[str, Any]],
    ) -> None:
        self._backend = backend
        self._name = name
        self._decode = decode
        self._encode = encode

    @property
    def name(self) -> str:
        return self._name

    def list(self, session: SessionContext) -> Result[list[T]]:
        return self._decode_list(self._backend.call("GET", self._name, session))

    def get(self, session: SessionContext, record_id: int) -> Result[T]:
        result = self._backend.call("GET", f"{self._name}/{record_id}", session)
        if isinstance(result, Err):
            return result
        return Ok(self._decode_one(result.value))

    def create(self, session: SessionContext, fields: Mapping[str, Any]) -> Result[int]:
        result = self._backend.call("POST", self._name, session, body=self._encode(fields))
        return _as_int(result)

    def update(
        self, session: SessionContext, record_id: int, fields: Mapping[str, Any]
    ) -> Result[None]:
        result = self._backend.call(
            "PUT", f"{self._name}/{record_id}", session, body=self._encode(fields)
        )
        return _as_unit(result)

    def delete(self, session: SessionContext, record_id: int) -> Result[None]:
        return _as_unit(self._backend.call("DELETE", f"{self._name}/{record_id}", session))

    # ----------------------------
    # Internals
    # ----------------------------
    def _decode_list(self, result: Result[Any]) -> Result[list[T]]:
        if isinstance(result, Err):
            return result
        items = result.value
        if not isinstance(items, list):
            raise ServerError(
                "Expected a list of records",
                details={"resource": self._name, "type": type(items).__name__},
            )
        return Ok([self._decode_one(item) for item in items])

    def _decode_one(self, data: Any) -> T:
        if not isinstance(data, dict):
            raise ServerError("Expected a record object", details={"resource": self._name})
        try:
            return self._decode(data)
        except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
            raise ServerError(
                "Malformed record",
                details={"resource": self._name, "id": data.get("id")},
                cause=exc,
            ) from exc


class FileResource(HttpResource[FileRecord]):
    def __init__(self, backend: HttpBackend) -> None:
        super().__init__(backend, "files", _file_from_dict, _encode_plain)

    def upload_file(
        self, session: SessionContext, name: str, content_type: str, data: bytes
    ) -> Result[int]:
        body = {"name": name, "contentType": content_type, "data": _b64(data)}
        return _as_int(self._backend.call("POST", "files", session, body=body))

    def download_file(self, session: SessionContext, record_id: int) -> Result[bytes]:
        result = self._backend.call("GET", f"files/{record_id}/content", session)
        if isinstance(result, Err):
            return result
        return Ok(_unb64(result.value))

    def storage_usage(self, session: SessionContext) -> Result[int]:
        return _as_int(self._backend.call("GET", "files/usage", session))


class PhotoResource(HttpResource[PhotoRecord]):
    def __init__(self, backend: HttpBackend) -> None:
        super().__init__(backend, "photos", _photo_from_dict, _encode_plain)

    def upload_photo(
        self,
        session: SessionContext,
        name: str,
        content_type: str,
        data: bytes,
        album_id: int | None = None,
    ) -> Result[int]:
        body = {
            "name": name,
            "contentType": content_type,
            "data": _b64(data),
            "albumId": album_id,
        }
        return _as_int(self._backend.call("POST", "photos", session, body=body))

    def list_in_album(self, session: SessionContext, album_id: int) -> Result[list[PhotoRecord]]:
        result = self._backend.call("GET", "photos", session, params={"album": album_id})
        return self._decode_list(result)

    def storage_usage(self, session: SessionContext) -> Result[int]:
        return _as_int(self._backend.call("GET", "photos/usage", session))


class AlbumResource(HttpResource[AlbumRecord]):
    def __init__(self, backend: HttpBackend) -> None:
        super().__init__(backend, "albums", _album_from_dict, _encode_plain)

    def create_album(self, session: SessionContext, name: str) -> Result[int]:
        return self.create(session, {"name": name})

    def delete_album(self, session: SessionContext, album_id: int) -> Result[None]:
        return self.delete(session, album_id)


class ExpenseResource(HttpResource[ExpenseRecord]):
    def __init__(self, backend: HttpBackend) -> None:
        super().__init__(backend, "expenses", _expense_from_dict, _encode_expense)

    def import_expenses(self, session: SessionContext, lines: list[str]) -> Result[int]:
        result = self._backend.call("POST", "expenses/import", session, body={"lines": list(lines)})
        return _as_int(result)

    def export_expenses(self, session: SessionContext) -> Result[str]:
        result = self._backend.call("GET", "expenses/export", session)
        if isinstance(result, Err):
            return result
        return Ok(str(result.value))


# ----------------------------
# Wire decoding
# ----------------------------
def _file_from_dict(data: dict[str, Any]) -> FileRecord:
    return FileRecord(
        id=int(data["id"]),
        name=str(data["name"]),
        content_type=str(data.get("contentType", "")),
        size=int(data["size"]),
        created_at=from_epoch_nanos(data["createdAt"]),
    )


def _note_from_dict(data: dict[str, Any]) -> NoteRecord:
    return NoteRecord(
        id=int(data["id"]),
        title=str(data["title"]),
        content=str(data.get("content", "")),
        created_at=from_epoch_nanos(data["createdAt"]),
        updated_at=from_epoch_nanos(data["updatedAt"]),
    )


def _photo_from_dict(data: dict[str, Any]) -> PhotoRecord:
    album_id = _optional(data.get("albumId"))
    raw = data.get("data") or ""
    return PhotoRecord(
        id=int(data["id"]),
        name=str(data["name"]),
        content_type=str(data.get("contentType", "")),
        data=_unb64(raw) if isinstance(raw, str) else bytes(raw),
        created_at=from_epoch_nanos(data["createdAt"]),
        size=int(data["size"]),
        album_id=int(album_id) if album_id is not None else None,
    )


def _album_from_dict(data: dict[str, Any]) -> AlbumRecord:
    return AlbumRecord(
        id=int(data["id"]),
        name=str(data["name"]),
        created_at=from_epoch_nanos(data["createdAt"]),
    )


def _task_from_dict(data: dict[str, Any]) -> TaskRecord:
    due = _optional(data.get("dueDate"))
    return TaskRecord(
        id=int(data["id"]),
        title=str(data["title"]),
        description=str(data.get("description", "")),
        status=TaskStatus.from_wire(data["status"]),
        created_at=from_epoch_nanos(data["createdAt"]),
        updated_at=from_epoch_nanos(data["updatedAt"]),
        owner=str(data.get("owner", "")),
        due_date=from_epoch_nanos(due) if due is not None else None,
    )


def _expense_from_dict(data: dict[str, Any]) -> ExpenseRecord:
    return ExpenseRecord(
        id=int(data["id"]),
        amount=Decimal(str(data["amount"])),
        category=str(data["category"]),
        description=str(data.get("description", "")),
        date=from_epoch_millis(data["date"]),
    )


def _optional(value: Any) -> Any:
    # Optional values arrive either as null or as a zero/one element list.
    if isinstance(value, list):
        return value[0] if value else None
    return value


# ----------------------------
# Wire encoding
# ----------------------------
def _encode_plain(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {_camel(k): v for k, v in fields.items()}


def _encode_note(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {"title": fields.get("title"), "content": fields.get("content")}


def _encode_task(fields: Mapping[str, Any]) -> dict[str, Any]:
    body: dict[str, Any] = {
        "title": fields.get("title"),
        "description": fields.get("description", ""),
    }
    due = fields.get("due_date")
    body["dueDate"] = to_epoch_nanos(due) if due is not None else None
    status = fields.get("status")
    if status is not None:
        body["status"] = TaskStatus(status).to_wire()
    return body


def _encode_expense(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "amount": float(fields["amount"]),
        "category": fields.get("category"),
        "description": fields.get("description", ""),
        "date": to_epoch_millis(fields["date"]),
    }


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def _b64(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def _unb64(value: Any) -> bytes:
    if isinstance(value, list):
        return bytes(value)
    return base64.b64decode(str(value))


def _as_int(result: Result[Any]) -> Result[int]:
    if isinstance(result, Err):
        return result
    try:
        return Ok(int(result.value))
    except (TypeError, ValueError) as exc:
        raise ServerError("Expected an integer result", cause=exc) from exc


def _as_unit(result: Result[Any]) -> Result[None]:
    if isinstance(result, Err):
        return result
    return Ok(None)


def _response_to_info(resp: Any) -> HttpErrorInfo:
    message = None
    details: dict[str, Any] = {}
    try:
        payload = resp.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and "err" in payload:
        err = result_from_payload(payload)
        message = err.message if isinstance(err, Err) else None
    reason = getattr(resp, "reason", None)
    if isinstance(reason, str) and reason:
        details["reason"] = reason

    return HttpErrorInfo(
        status_code=int(resp.status_code),
        message=message,
        details=details or None,
    )
