"""Derived views: filtering, sorting, pagination and summaries."""

from __future__ import annotations

from .aggregator import (
    StorageUsage,
    aggregate,
    category_shares,
    category_totals,
    count,
    quota_ratio,
    total,
)
from .criteria import (
    ALL,
    EXPENSES_ALL,
    FILES_BY_RECENCY,
    NOTES_BY_RECENCY,
    PHOTOS_BY_RECENCY,
    TASKS_BY_DUE_DATE,
    CategoryFilter,
    Criteria,
    DateRange,
    SortOrder,
)
from .paginator import Page, Paginator, clamp_page, paginate, total_pages
from .pipeline import derive, sort_records

__all__ = [
    "ALL",
    "CategoryFilter",
    "DateRange",
    "SortOrder",
    "Criteria",
    "NOTES_BY_RECENCY",
    "FILES_BY_RECENCY",
    "PHOTOS_BY_RECENCY",
    "TASKS_BY_DUE_DATE",
    "EXPENSES_ALL",
    "derive",
    "sort_records",
    "Page",
    "Paginator",
    "paginate",
    "total_pages",
    "clamp_page",
    "aggregate",
    "count",
    "total",
    "quota_ratio",
    "category_totals",
    "category_shares",
    "StorageUsage",
]
