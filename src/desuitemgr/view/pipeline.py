"""derive(): turn a cached list into the filtered, sorted view."""

from __future__ import annotations

from typing import Iterable, Optional, TypeVar

from .criteria import Criteria, SortOrder

T = TypeVar("T")


def derive(records: Iterable[T], criteria: Optional[Criteria] = None) -> list[T]:
    """
    Filter then sort *records*.

    Pure and deterministic: the input is not modified, sorting is stable, and
    applying the same criteria twice gives the same list.
    """
    items = list(records)
    if criteria is None:
        return items
    kept = [r for r in items if criteria.matches(r)]
    if criteria.sort is None:
        return kept
    return sort_records(kept, criteria.sort)


def sort_records(records: list[T], order: SortOrder) -> list[T]:
    if order.kind == "due_date":
        return _sort_by_due_date(records, order)

    present = [r for r in records if getattr(r, order.field, None) is not None]
    missing = [r for r in records if getattr(r, order.field, None) is None]
    present.sort(
        key=lambda r: getattr(r, order.field),
        reverse=order.kind == "descending",
    )
    return present + missing


def _sort_by_due_date(records: list[T], order: SortOrder) -> list[T]:
    dated = [r for r in records if getattr(r, order.field, None) is not None]
    undated = [r for r in records if getattr(r, order.field, None) is None]

    dated.sort(key=lambda r: getattr(r, order.field))
    if order.fallback_field:
        fallback = order.fallback_field
        with_fallback = [r for r in undated if getattr(r, fallback, None) is not None]
        without = [r for r in undated if getattr(r, fallback, None) is None]
        with_fallback.sort(key=lambda r: getattr(r, fallback), reverse=True)
        undated = with_fallback + without
    return dated + undated