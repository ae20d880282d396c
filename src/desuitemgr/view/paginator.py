"""Fixed-size pages over a derived view."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def total_pages(count: int, page_size: int) -> int:
    """ceil(count / page_size), never less than 1."""
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return max(1, (count + page_size - 1) // page_size)


def clamp_page(page_index: int, pages: int) -> int:
    return min(max(page_index, 1), pages)


@dataclass
class Page(Generic[T]):
    """One page of a view. page_index is 1-based and always valid."""

    items: list[T] = field(default_factory=list)
    page_index: int = 1
    total_pages: int = 1
    page_size: int = 1
    total_count: int = 0

    @property
    def has_previous(self) -> bool:
        return self.page_index > 1

    @property
    def has_next(self) -> bool:
        return self.page_index < self.total_pages


def paginate(records: Sequence[T], page_size: int, page_index: int = 1) -> Page[T]:
    """
    Slice *records* into the requested page.

    Out-of-range indices are clamped: past the end means the last page,
    below 1 means the first. An empty list still has one (empty) page.
    """
    pages = total_pages(len(records), page_size)
    index = clamp_page(page_index, pages)
    start = (index - 1) * page_size
    return Page(
        items=list(records[start : start + page_size]),
        page_index=index,
        total_pages=pages,
        page_size=page_size,
        total_count=len(records),
    )


class Paginator:
    """
    Tracks the current page of a view whose length changes over time.

    Each call to show() re-clamps the current page, so a deletion that
    shrinks the list never leaves the view on a blank page.
    """

    def __init__(self, page_size: int) -> None:
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self._page_size = page_size
        self._page_index = 1
        self._total_pages = 1

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def page_index(self) -> int:
        return self._page_index

    def show(self, records: Sequence[T]) -> Page[T]:
        page = paginate(records, self._page_size, self._page_index)
        if page.page_index != self._page_index:
            LOGGER.debug("Clamped page %d to %d", self._page_index, page.page_index)
        self._page_index = page.page_index
        self._total_pages = page.total_pages
        return page

    def go_to(self, page_index: int) -> int:
        """
        Request *page_index*.

        Only the lower bound is applied here; the next show() clamps the
        request against the list it is given, which may have grown since.
        """
        self._page_index = max(page_index, 1)
        return self._page_index

    def next(self) -> int:
        """Step forward, stopping at the last page of the most recent show()."""
        self._page_index = clamp_page(self._page_index + 1, max(self._total_pages, self._page_index))
        return self._page_index

    def previous(self) -> int:
        return self.go_to(self._page_index - 1)

    def reset(self) -> None:
        self._page_index = 1
