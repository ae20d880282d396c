"""Summary values for charts and usage meters."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Hashable, Iterable, TypeVar

from desuitemgr.util.units import format_mb, format_whole_mb

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def aggregate(
    records: Iterable[T],
    key_fn: Callable[[T], K],
    value_fn: Callable[[T], Any],
) -> dict[K, Any]:
    """
    Sum value_fn(record) per key_fn(record).

    The values of the result always add up to total(records, value_fn).
    """
    totals: dict[K, Any] = {}
    for record in records:
        key = key_fn(record)
        totals[key] = totals.get(key, 0) + value_fn(record)
    return totals


def count(records: Iterable[Any]) -> int:
    return sum(1 for _ in records)


def total(records: Iterable[T], value_fn: Callable[[T], Any]) -> Any:
    """Sum of value_fn over records; 0 for an empty input."""
    result: Any = 0
    for record in records:
        result = result + value_fn(record)
    return result


def quota_ratio(used_bytes: int, quota_bytes: int) -> float:
    """used / quota, or 0.0 when there is no quota to divide by."""
    if quota_bytes <= 0:
        return 0.0
    return used_bytes / quota_bytes


def category_totals(expenses: Iterable[Any]) -> dict[str, Decimal]:
    """Expense amounts per category, for the category chart."""
    return aggregate(expenses, lambda e: e.category, lambda e: e.amount)


def category_shares(expenses: Iterable[Any]) -> dict[str, float]:
    """
    Fraction of the overall amount spent per category.

    All zero when nothing was spent.
    """
    totals = category_totals(expenses)
    overall = sum(totals.values(), Decimal(0))
    if overall == 0:
        return {category: 0.0 for category in totals}
    return {category: float(amount / overall) for category, amount in totals.items()}


@dataclass(slots=True, frozen=True)
class StorageUsage:
    """Bytes used against a fixed quota."""

    used_bytes: int
    quota_bytes: int

    @property
    def ratio(self) -> float:
        return quota_ratio(self.used_bytes, self.quota_bytes)

    @property
    def percent(self) -> float:
        return self.ratio * 100

    @property
    def remaining_bytes(self) -> int:
        return max(0, self.quota_bytes - self.used_bytes)

    def would_exceed(self, extra_bytes: int) -> bool:
        return self.used_bytes + extra_bytes > self.quota_bytes

    def format_usage(self) -> str:
        """E.g. ``"42.00 MB / 100 MB"``."""
        return f"{format_mb(self.used_bytes)} / {format_whole_mb(self.quota_bytes)}"
