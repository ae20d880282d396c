"""Filter and sort criteria for derived views."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Literal, Optional

from desuitemgr.util.time import as_utc_bound

ALL = "all"
"""Sentinel filter value meaning "do not filter"."""

SortKind = Literal["descending", "ascending", "due_date"]


def _normalize(value: Any, case_insensitive: bool) -> Any:
    if isinstance(value, Enum):
        value = value.value
    if case_insensitive and isinstance(value, str):
        return value.casefold()
    return value


@dataclass(slots=True, frozen=True)
class CategoryFilter:
    """
    Equality filter on a categorical field.

    Notes:
        - value == ALL disables the filter.
        - Enum members compare by their value, so TaskStatus.DONE and "done"
          are the same filter.
        - Values the records never carry simply match nothing.
    """

    field: str
    value: Any = ALL
    case_insensitive: bool = True

    @property
    def active(self) -> bool:
        return self.value != ALL

    def matches(self, record: Any) -> bool:
        if not self.active:
            return True
        actual = getattr(record, self.field, None)
        if actual is None:
            return False
        return _normalize(actual, self.case_insensitive) == _normalize(
            self.value, self.case_insensitive
        )


@dataclass(slots=True, frozen=True)
class DateRange:
    """
    Inclusive range on a timestamp field.

    A missing bound is open on that side. Plain dates cover the whole day, so
    ``DateRange("date", end=date(2025, 1, 31))`` keeps everything on Jan 31st.
    Records whose field is missing never match an active range.
    """

    field: str
    start: Optional[date | datetime] = None
    end: Optional[date | datetime] = None

    @property
    def active(self) -> bool:
        return self.start is not None or self.end is not None

    def matches(self, record: Any) -> bool:
        if not self.active:
            return True
        actual = getattr(record, self.field, None)
        if not isinstance(actual, datetime):
            return False
        if self.start is not None and actual < as_utc_bound(self.start, upper=False):
            return False
        if self.end is not None and actual > as_utc_bound(self.end, upper=True):
            return False
        return True


@dataclass(slots=True, frozen=True)
class SortOrder:
    kind: SortKind
    field: str
    fallback_field: Optional[str] = None

    @classmethod
    def newest_first(cls, field: str) -> "SortOrder":
        return cls("descending", field)

    @classmethod
    def oldest_first(cls, field: str) -> "SortOrder":
        return cls("ascending", field)

    @classmethod
    def due_date_ascending(
        cls, field: str = "due_date", fallback_field: str = "created_at"
    ) -> "SortOrder":
        """
        Earliest due date first.

        Records without a due date come after every dated record and are
        ordered among themselves by *fallback_field*, newest first.
        """
        return cls("due_date", field, fallback_field)


@dataclass(slots=True, frozen=True)
class Criteria:
    """Everything derive() needs to turn a cached list into a view."""

    filters: tuple[CategoryFilter, ...] = ()
    date_ranges: tuple[DateRange, ...] = ()
    sort: Optional[SortOrder] = None

    def matches(self, record: Any) -> bool:
        return all(f.matches(record) for f in self.filters) and all(
            r.matches(record) for r in self.date_ranges
        )

    def with_category(self, field: str, value: Any, *, case_insensitive: bool = True) -> "Criteria":
        """Return a copy with the filter on *field* replaced by *value*."""
        kept = tuple(f for f in self.filters if f.field != field)
        return replace(self, filters=kept + (CategoryFilter(field, value, case_insensitive),))

    def with_date_range(
        self,
        field: str,
        start: Optional[date | datetime] = None,
        end: Optional[date | datetime] = None,
    ) -> "Criteria":
        kept = tuple(r for r in self.date_ranges if r.field != field)
        return replace(self, date_ranges=kept + (DateRange(field, start, end),))

    def with_sort(self, sort: Optional[SortOrder]) -> "Criteria":
        return replace(self, sort=sort)


# Default views per resource.
NOTES_BY_RECENCY = Criteria(sort=SortOrder.newest_first("updated_at"))
FILES_BY_RECENCY = Criteria(sort=SortOrder.newest_first("created_at"))
PHOTOS_BY_RECENCY = Criteria(sort=SortOrder.newest_first("created_at"))
TASKS_BY_DUE_DATE = Criteria(
    filters=(CategoryFilter("status"),),
    sort=SortOrder.due_date_ascending(),
)
EXPENSES_ALL = Criteria(
    filters=(CategoryFilter("category"),),
    date_ranges=(DateRange("date"),),
)
