"""Client-side validation run before any collaborator call."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from desuitemgr.errors import LocalValidationError
from desuitemgr.models import TaskStatus
from desuitemgr.util.time import normalize_dt, start_of_day
from desuitemgr.util.units import format_whole_mb


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_text(fields: Mapping[str, Any], name: str, what: str) -> str:
    value = fields.get(name)
    if _blank(value):
        raise LocalValidationError(f"{what} cannot be empty.", details={"field": name})
    return str(value)


def parse_day(value: Any, name: str) -> datetime:
    """
    Accept a date, a tz-aware datetime or a ``YYYY-MM-DD`` string.

    Plain dates become midnight UTC.
    """
    if isinstance(value, datetime):
        try:
            return normalize_dt(value)
        except ValueError as exc:
            raise LocalValidationError(
                f"Invalid {name}: timezone required", details={"field": name}, cause=exc
            ) from exc
    if isinstance(value, date):
        return start_of_day(value)
    if isinstance(value, str) and value.strip():
        try:
            return start_of_day(date.fromisoformat(value.strip()))
        except ValueError as exc:
            raise LocalValidationError(
                f"Invalid {name}: {value!r}", details={"field": name}, cause=exc
            ) from exc
    raise LocalValidationError(f"Invalid {name}: {value!r}", details={"field": name})


def parse_amount(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise LocalValidationError(
                f"Invalid amount: {value!r}", details={"field": "amount"}, cause=exc
            ) from exc
    if not amount.is_finite():
        raise LocalValidationError(f"Invalid amount: {value!r}", details={"field": "amount"})
    return amount


# ----------------------------
# Per-resource form validation
# ----------------------------
def validate_note_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    if _blank(fields.get("title")) or _blank(fields.get("content")):
        raise LocalValidationError("Note title and content cannot be empty.")
    return {"title": str(fields["title"]), "content": str(fields["content"])}


def validate_task_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    title = require_text(fields, "title", "Task title")
    due_raw = fields.get("due_date")
    due = None if _blank(due_raw) else parse_day(due_raw, "due date")
    cleaned: dict[str, Any] = {
        "title": title,
        "description": str(fields.get("description") or ""),
        "due_date": due,
    }
    status = fields.get("status")
    if status is not None:
        try:
            cleaned["status"] = TaskStatus.from_wire(status)
        except ValueError as exc:
            raise LocalValidationError(
                f"Unknown task status: {status!r}", details={"field": "status"}, cause=exc
            ) from exc
    return cleaned


def validate_expense_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    if any(_blank(fields.get(name)) for name in ("amount", "category", "date")):
        raise LocalValidationError("Please fill in all required fields")
    return {
        "amount": parse_amount(fields["amount"]),
        "category": str(fields["category"]),
        "description": str(fields.get("description") or ""),
        "date": parse_day(fields["date"], "date"),
    }


def validate_album_name(name: Optional[str]) -> str:
    if _blank(name):
        raise LocalValidationError("Album name cannot be empty.", details={"field": "name"})
    return str(name).strip()


# ----------------------------
# Uploads
# ----------------------------
def validate_file_upload(size: int, used_bytes: int, *, max_file_bytes: int, quota_bytes: int) -> None:
    if size > max_file_bytes:
        raise LocalValidationError(
            "File size exceeds the maximum allowed size of "
            f"{format_whole_mb(max_file_bytes)}",
            details={"size": size, "max_file_bytes": max_file_bytes},
        )
    if used_bytes + size > quota_bytes:
        raise LocalValidationError(
            "Uploading this file would exceed your storage quota of "
            f"{format_whole_mb(quota_bytes)}",
            details={"size": size, "used_bytes": used_bytes, "quota_bytes": quota_bytes},
        )


def validate_photo_upload(content_type: str, size: int, used_bytes: int, *, quota_bytes: int) -> None:
    if not content_type or not content_type.startswith("image/"):
        raise LocalValidationError(
            "Please select an image file.", details={"content_type": content_type}
        )
    if used_bytes + size > quota_bytes:
        raise LocalValidationError(
            "Storage limit exceeded. Please delete some photos before uploading more.",
            details={"size": size, "used_bytes": used_bytes, "quota_bytes": quota_bytes},
        )


__all__ = [
    "require_text",
    "parse_day",
    "parse_amount",
    "validate_note_fields",
    "validate_task_fields",
    "validate_expense_fields",
    "validate_album_name",
    "validate_file_upload",
    "validate_photo_upload",
]
