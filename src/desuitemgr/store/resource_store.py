"""Cached copies of collaborator state."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Callable, Generic, Literal, Optional, TypeVar

from desuitemgr.errors import TransportError
from desuitemgr.models import Err, Ok, Result
from desuitemgr.session import SessionContext

LOGGER = logging.getLogger(__name__)

V = TypeVar("V")
T = TypeVar("T")

StoreErrorKind = Literal["rejected", "transport"]


@dataclass(slots=True, frozen=True)
class StoreError:
    """Why the last load did not refresh the cache."""

    kind: StoreErrorKind
    message: str


class CachedStore(Generic[V]):
    """
    Holds the last value loaded from a collaborator.

    Policy:
        - A successful load replaces the cached value entirely.
        - A failed load fills the error slot and keeps the previous value
          (stale but available).
        - Overlapping loads are not coalesced; whichever response resolves
          last overwrites the cache.
        - After close(), completed loads are discarded.
    """

    def __init__(
        self,
        loader: Callable[[SessionContext], Result[V]],
        initial: V,
        *,
        name: str = "resource",
    ) -> None:
        self._loader = loader
        self._value = initial
        self._name = name
        self._error: Optional[StoreError] = None
        self._in_flight = 0
        self._closed = False
        self._version = 0
        self._lock = threading.Lock()

    # ----------------------------
    # State
    # ----------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> V:
        return self._value

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def error(self) -> Optional[StoreError]:
        return self._error

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def version(self) -> int:
        """Incremented every time the cached value or error slot changes."""
        return self._version

    # ----------------------------
    # Loading
    # ----------------------------
    def load(self, session: SessionContext) -> Result[V]:
        """
        Fetch from the collaborator and update the cache.

        Returns the collaborator's answer; transport failures are turned into
        Err with a generic message (never raised).
        """
        if self._closed:
            return Err(f"{self._name} store is closed")

        with self._lock:
            self._in_flight += 1

        failure: Optional[StoreError] = None
        try:
            result = self._loader(session)
        except TransportError as exc:
            LOGGER.warning("Loading %s failed", self._name, exc_info=exc)
            failure = StoreError(
                "transport", f"Failed to fetch {self._name}. Please try again later."
            )
            result = Err(failure.message)

        with self._lock:
            self._in_flight -= 1
            if self._closed:
                LOGGER.debug("Discarding %s load completed after close", self._name)
                return result

            if failure is not None:
                self._error = failure
                self._version += 1
                return result

            if isinstance(result, Ok):
                self._value = result.value
                self._error = None
                LOGGER.debug("Loaded %s", self._name)
            else:
                LOGGER.info("Loading %s rejected: %s", self._name, result.message)
                self._error = StoreError("rejected", result.message)
            self._version += 1
            return result

    def load_in_background(self, session: SessionContext, executor: Executor) -> Future:
        """Submit load() to *executor*; the returned future resolves to its Result."""
        return executor.submit(self.load, session)

    def close(self) -> None:
        """Detach the store from its view; later load results are dropped."""
        with self._lock:
            self._closed = True

    def clear_error(self) -> None:
        with self._lock:
            if self._error is not None:
                self._error = None
                self._version += 1

    def _replace(self, value: V) -> None:
        with self._lock:
            self._value = value
            self._version += 1


class ResourceStore(CachedStore[list[T]]):
    """Cached list of records for one resource."""

    def __init__(
        self,
        loader: Callable[[SessionContext], Result[list[T]]],
        *,
        name: str = "records",
    ) -> None:
        super().__init__(loader, [], name=name)

    @property
    def records(self) -> list[T]:
        return list(self._value)

    def __len__(self) -> int:
        return len(self._value)

    def get(self, record_id: int) -> Optional[T]:
        for record in self._value:
            if getattr(record, "id", None) == record_id:
                return record
        return None

    def forget(self, record_id: int) -> bool:
        """
        Drop a deleted record from the cache right away.

        Returns True if the id was cached.
        """
        remaining = [r for r in self._value if getattr(r, "id", None) != record_id]
        if len(remaining) == len(self._value):
            return False
        self._replace(remaining)
        return True
