"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Single-flight result cache keyed by normalized query text.

Each key maps to one ``CacheEntry`` holding a thread-safe result cell. The
first caller for a key installs the entry and starts the computation; every
later caller, on any thread or event loop, awaits the same cell through a
wrapper bound to its own loop. Successful entries stay for the process
lifetime, failed ones are removed before the failure is published so the
next request starts fresh.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import threading
import time
from collections.abc import Awaitable, Callable
from typing import Any, Generic, Literal, TypeVar

T = TypeVar("T")

EntryState = Literal["pending", "succeeded", "failed"]

logger = logging.getLogger("bravemcp.cache")


class ComputationCancelledError(RuntimeError):
    """Raised to waiters when the task driving a computation was cancelled."""


class CacheEntry(Generic[T]):
    """
    Single-assignment result cell shared by every caller of one key.

    The cell is marked running as soon as it is created, so no waiter can
    cancel it. State moves from ``pending`` to either ``succeeded`` or
    ``failed`` exactly once, and a ``failed`` entry is removed from the cache
    mapping before the failure becomes visible.
    """

    __slots__ = ("key", "cell", "created_at_s", "_driver")

    def __init__(self, key: str) -> None:
        self.key = key
        self.cell: concurrent.futures.Future[T] = concurrent.futures.Future()
        self.cell.set_running_or_notify_cancel()
        self.created_at_s = time.time()
        self._driver: asyncio.Task[None] | None = None

    @property
    def state(self) -> EntryState:
        if not self.cell.done():
            return "pending"
        if self.cell.exception() is not None:
            return "failed"
        return "succeeded"

    def __repr__(self) -> str:
        return f"CacheEntry(key={self.key!r}, state={self.state!r})"


class CoalescingCache(Generic[T]):
    """
    Deduplicate in-flight and completed computations per key.

    Insertion is a single ``dict.setdefault`` so two callers can never both
    observe an absent key and both start ``compute``. Removal is
    compare-and-delete under a short lock that is never held across an
    upstream call.
    """

    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._entries: dict[str, CacheEntry[T]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Awaitable[T]],
    ) -> asyncio.Future[T]:
        """
        Return a future for ``key`` on the running loop, starting ``compute`` on a miss.

        Each caller gets its own future; cancelling it detaches that caller
        only and never cancels the shared computation.
        """
        loop = asyncio.get_running_loop()
        fresh: CacheEntry[T] = CacheEntry(key)
        entry = self._entries.setdefault(key, fresh)
        if entry is not fresh:
            self._count(hit=True)
            return asyncio.wrap_future(entry.cell, loop=loop)

        self._count(hit=False)
        logger.info("Cache miss for %s (cache=%s)", key, self.name)
        entry._driver = loop.create_task(self._drive(entry, compute))
        return asyncio.wrap_future(entry.cell, loop=loop)

    async def run(self, key: str, compute: Callable[[], Awaitable[T]]) -> T:
        """Await the shared result for ``key``."""
        return await self.get_or_compute(key, compute)

    async def _drive(
        self,
        entry: CacheEntry[T],
        compute: Callable[[], Awaitable[T]],
    ) -> None:
        try:
            value = await compute()
        except asyncio.CancelledError:
            logger.error("Computation for %s was cancelled; evicting", entry.key)
            self._remove(entry)
            entry.cell.set_exception(
                ComputationCancelledError(f"Computation for {entry.key!r} was cancelled")
            )
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Error while computing %s (cache=%s): %s",
                entry.key,
                self.name,
                exc,
                exc_info=exc,
            )
            # Evict before publishing so no new caller can pick up the failure.
            self._remove(entry)
            entry.cell.set_exception(exc)
            return
        entry.cell.set_result(value)
        logger.info("Cached result for %s (cache=%s)", entry.key, self.name)

    def _remove(self, entry: CacheEntry[T]) -> bool:
        with self._lock:
            if self._entries.get(entry.key) is not entry:
                return False
            del self._entries[entry.key]
            self._evictions += 1
            return True

    def _count(self, *, hit: bool) -> None:
        with self._lock:
            if hit:
                self._hits += 1
            else:
                self._misses += 1

    # ''''''''''''''
    # Introspection
    # ''''''''''''''

    def peek(self, key: str) -> CacheEntry[T] | None:
        return self._entries.get(key)

    def invalidate(self, key: str) -> bool:
        """Drop the entry for ``key``; callers already waiting keep their future."""
        entry = self._entries.get(key)
        if entry is None:
            return False
        return self._remove(entry)

    def keys(self) -> list[str]:
        return list(self._entries.keys())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def stats(self) -> dict[str, Any]:
        entries = list(self._entries.values())
        with self._lock:
            hits, misses, evictions = self._hits, self._misses, self._evictions
        return {
            "name": self.name,
            "entries": len(entries),
            "in_flight": sum(1 for e in entries if e.state == "pending"),
            "hits": hits,
            "misses": misses,
            "evictions": evictions,
        }
