"""Delimited-text format for importing and exporting expenses."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from desuitemgr.errors import LocalValidationError
from desuitemgr.models import ExpenseRecord
from desuitemgr.validation import parse_amount, parse_day

HEADER: tuple[str, ...] = ("amount", "category", "description", "date")


@dataclass(slots=True, frozen=True)
class ExpenseRow:
    """One expense as carried by the text format (no id: the backend assigns it)."""

    amount: Decimal
    category: str
    description: str
    date: datetime

    @classmethod
    def from_record(cls, record: ExpenseRecord) -> "ExpenseRow":
        return cls(record.amount, record.category, record.description, record.date)

    def as_fields(self) -> dict[str, object]:
        return {
            "amount": self.amount,
            "category": self.category,
            "description": self.description,
            "date": self.date,
        }


def format_expenses(expenses: Iterable[ExpenseRecord | ExpenseRow]) -> str:
    """
    Render expenses as CSV text with a header row.

    Amounts are written exactly as stored; dates as ``YYYY-MM-DD`` (UTC).
    Text fields are quoted when needed and never trimmed.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(HEADER)
    for e in expenses:
        writer.writerow(
            [
                str(e.amount),
                e.category,
                e.description,
                e.date.astimezone(timezone.utc).date().isoformat(),
            ]
        )
    return buf.getvalue()


def split_import_lines(text: str) -> list[str]:
    """Split an uploaded file into trimmed, non-empty lines for the backend importer."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def parse_expenses(lines: Iterable[str] | str) -> list[ExpenseRow]:
    """
    Parse CSV lines produced by format_expenses().

    The header row is optional. A quoted field may span several physical
    lines; text fields are kept verbatim. Raises LocalValidationError naming
    the offending line when a row is malformed.
    """
    if isinstance(lines, str):
        lines = io.StringIO(lines, newline="")

    rows: list[ExpenseRow] = []
    reader = csv.reader(lines)
    for fields in reader:
        lineno = reader.line_num
        if not fields or all(not f.strip() for f in fields):
            continue
        if tuple(f.strip().lower() for f in fields) == HEADER:
            continue
        if len(fields) != len(HEADER):
            raise LocalValidationError(
                f"Line {lineno}: expected {len(HEADER)} columns, got {len(fields)}",
                details={"line": lineno},
            )
        amount, category, description, day = fields
        try:
            rows.append(
                ExpenseRow(
                    amount=parse_amount(amount),
                    category=category,
                    description=description,
                    date=parse_day(day, "date"),
                )
            )
        except LocalValidationError as exc:
            raise LocalValidationError(
                f"Line {lineno}: {exc}",
                details={"line": lineno, **exc.details},
                cause=exc,
            ) from exc
    return rows
