"""Small in-memory cache with a fixed time to live."""

from __future__ import annotations

import asyncio
import time
from typing import Callable, Generic, Hashable, TypeVar

V = TypeVar("V")


class TTLCache(Generic[V]):
    """Async-safe mapping whose entries expire ``ttl`` seconds after insertion."""

    def __init__(self, ttl: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[Hashable, tuple[float, V]] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: Hashable) -> V | None:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    async def set(self, key: Hashable, value: V) -> None:
        if self._ttl <= 0:
            return
        async with self._lock:
            self._entries[key] = (self._clock() + self._ttl, value)

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["TTLCache"]
