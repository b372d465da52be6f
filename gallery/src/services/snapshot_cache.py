"""
In-process TTL cache with single-flight loading.

A SnapshotCache holds one value (the "snapshot") produced by a loader, for
example the full artwork collection fetched from Airtable. Reads within the
TTL are served from memory. When the snapshot is missing or stale, exactly
one caller runs the loader while every concurrent caller waits on the same
Future and receives the same result or the same exception.

Django serves requests from several threads, so the in-flight check-and-set
and the snapshot swap happen under a lock. The loader itself runs outside
the lock.
"""

import logging
import threading
import time
from concurrent.futures import Future, TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from gallery.src.exceptions import SourceUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CacheInfo:
    """Explicit hit/miss accounting for one cache.

    Attributes:
        name: Registry name of the cache
        hits: Reads served from a fresh snapshot
        misses: Reads that had to wait for a fetch
        fetches: Loader calls started
        failures: Loader calls that raised
        has_snapshot: Whether a snapshot is held
        age_seconds: Age of the snapshot, None without one
        ttl_seconds: Configured time-to-live
        in_flight: Whether a fetch is running right now
    """

    name: str
    hits: int
    misses: int
    fetches: int
    failures: int
    has_snapshot: bool
    age_seconds: Optional[float]
    ttl_seconds: float
    in_flight: bool


class SnapshotCache(Generic[T]):
    def __init__(
        self,
        loader: Callable[[], T],
        ttl_seconds: float,
        name: str = "snapshot",
        wait_timeout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.name = name
        self.ttl_seconds = ttl_seconds
        self.wait_timeout = wait_timeout
        self._loader = loader
        self._clock = clock

        self._lock = threading.Lock()
        self._snapshot: Optional[T] = None
        self._fetched_at: Optional[float] = None
        self._in_flight: Optional[Future] = None
        # Bumped by invalidate(); a fetch started under an older generation
        # still answers its waiters but is not stamped fresh.
        self._generation = 0
        self._in_flight_generation = 0

        self._hits = 0
        self._misses = 0
        self._fetches = 0
        self._failures = 0

    def get(self) -> T:
        """Return the snapshot, fetching it first if it is missing or expired."""
        with self._lock:
            if self._is_fresh():
                self._hits += 1
                logger.debug(f"[{self.name}] cache hit")
                return self._snapshot  # type: ignore[return-value]
            self._misses += 1
            future, is_leader = self._join_or_start_fetch()

        if is_leader:
            self._run_fetch(future)
        return self._wait(future)

    def refresh(self) -> T:
        """Fetch a new snapshot regardless of the current one's age.

        A refresh that arrives while a fetch is already running joins that
        fetch instead of starting a second one.
        """
        with self._lock:
            future, is_leader = self._join_or_start_fetch()

        if is_leader:
            logger.info(f"[{self.name}] refreshing cache")
            self._run_fetch(future)
        else:
            logger.info(f"[{self.name}] refresh joined the fetch already in flight")
        return self._wait(future)

    def invalidate(self) -> None:
        """Drop the snapshot so that the next read fetches again."""
        with self._lock:
            self._snapshot = None
            self._fetched_at = None
            self._generation += 1
        logger.info(f"[{self.name}] cache invalidated")

    def peek(self) -> Optional[T]:
        """Return the current snapshot, fresh or stale, without fetching."""
        with self._lock:
            return self._snapshot

    def info(self) -> CacheInfo:
        with self._lock:
            age = None
            if self._fetched_at is not None:
                age = self._clock() - self._fetched_at
            return CacheInfo(
                name=self.name,
                hits=self._hits,
                misses=self._misses,
                fetches=self._fetches,
                failures=self._failures,
                has_snapshot=self._fetched_at is not None,
                age_seconds=age,
                ttl_seconds=self.ttl_seconds,
                in_flight=self._in_flight is not None,
            )

    # Callers must hold self._lock for the two helpers below.

    def _is_fresh(self) -> bool:
        return (
            self._fetched_at is not None
            and self._clock() - self._fetched_at < self.ttl_seconds
        )

    def _join_or_start_fetch(self) -> tuple[Future, bool]:
        if self._in_flight is not None:
            return self._in_flight, False
        future: Future = Future()
        self._in_flight = future
        self._in_flight_generation = self._generation
        self._fetches += 1
        return future, True

    def _run_fetch(self, future: Future) -> None:
        start_time = self._clock()
        try:
            value = self._loader()
        except Exception as e:
            # The previous snapshot, if any, stays untouched.
            with self._lock:
                self._in_flight = None
                self._failures += 1
            logger.error(f"[{self.name}] fetch failed: {e}", exc_info=True)
            future.set_exception(e)
            return

        with self._lock:
            self._in_flight = None
            superseded = self._in_flight_generation != self._generation
            if not superseded:
                self._snapshot = value
                self._fetched_at = self._clock()
        if superseded:
            logger.info(
                f"[{self.name}] cache was invalidated during the fetch, result not cached"
            )
        else:
            logger.info(
                f"[{self.name}] cached new snapshot in {self._clock() - start_time:.2f} seconds"
            )
        future.set_result(value)

    def _wait(self, future: Future) -> T:
        try:
            return future.result(timeout=self.wait_timeout)
        except FutureTimeoutError:
            raise SourceUnavailableError(
                f"Timed out after {self.wait_timeout}s waiting for {self.name} fetch"
            )
