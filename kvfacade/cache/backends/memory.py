"""
kvfacade — Memory Store Backend

In-process implementation of the store commands used by the facade, with
Redis semantics for TTLs, data types and list indexing.
Safe for concurrent tasks on one event loop; suitable for tests and
single-process deployments.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Any

from redis.exceptions import ResponseError

logger = logging.getLogger(__name__)

WRONGTYPE_MESSAGE = "WRONGTYPE Operation against a key holding the wrong kind of value"


class MemoryStore:
    """
    In-memory store speaking the redis-py command subset of ``StoreClient``.

    Features:
    - Scalar, set and list values sharing one key space
    - Per-key TTL with lazy expiry on access
    - WRONGTYPE errors raised as ``redis.exceptions.ResponseError``
    - Empty sets and lists are removed, as Redis does
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize memory store.

        Args:
            clock: Monotonic time source in seconds, injectable for tests
        """
        self._clock = clock

        # key -> value (str | set[str] | list[str])
        self._data: dict[str, Any] = {}
        # key -> absolute expiry time on self._clock
        self._expiry: dict[str, float] = {}

        self._lock = asyncio.Lock()

    # ------------ Helpers ------------

    def _is_expired(self, key: str) -> bool:
        expiry = self._expiry.get(key)
        return expiry is not None and self._clock() >= expiry

    def _purge_if_expired(self, key: str) -> None:
        if self._is_expired(key):
            self._remove(key)

    def _remove(self, key: str) -> bool:
        self._expiry.pop(key, None)
        return self._data.pop(key, None) is not None

    def _lookup(self, key: str, kind: type) -> Any | None:
        """Return the live value at ``key``, raising WRONGTYPE if it is not ``kind``."""
        self._purge_if_expired(key)
        value = self._data.get(key)
        if value is not None and not isinstance(value, kind):
            raise ResponseError(WRONGTYPE_MESSAGE)
        return value

    @staticmethod
    def _encode(value: Any) -> str:
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    # ------------ Scalar commands ------------

    async def get(self, name: str) -> str | None:
        async with self._lock:
            return self._lookup(name, str)

    async def set(
        self,
        name: str,
        value: Any,
        ex: int | None = None,
        nx: bool = False,
    ) -> bool | None:
        if ex is not None and ex <= 0:
            raise ResponseError("invalid expire time in 'set' command")

        async with self._lock:
            self._purge_if_expired(name)
            if nx and name in self._data:
                return None

            self._data[name] = self._encode(value)
            # SET discards any previous TTL
            self._expiry.pop(name, None)
            if ex is not None:
                self._expiry[name] = self._clock() + ex
            return True

    # ------------ Key commands ------------

    async def delete(self, *names: str) -> int:
        async with self._lock:
            deleted = 0
            for name in names:
                self._purge_if_expired(name)
                if self._remove(name):
                    deleted += 1
            return deleted

    async def exists(self, *names: str) -> int:
        async with self._lock:
            count = 0
            for name in names:
                self._purge_if_expired(name)
                if name in self._data:
                    count += 1
            return count

    async def expire(self, name: str, time: int) -> bool:
        async with self._lock:
            self._purge_if_expired(name)
            if name not in self._data:
                return False

            if time <= 0:
                # Non-positive TTL deletes the key immediately
                self._remove(name)
            else:
                self._expiry[name] = self._clock() + time
            return True

    async def ttl(self, name: str) -> int:
        async with self._lock:
            self._purge_if_expired(name)
            if name not in self._data:
                return -2

            expiry = self._expiry.get(name)
            if expiry is None:
                return -1
            return max(0, round(expiry - self._clock()))

    # ------------ Set commands ------------

    async def sadd(self, name: str, *values: Any) -> int:
        if not values:
            raise ResponseError("wrong number of arguments for 'sadd' command")

        async with self._lock:
            members = self._lookup(name, set)
            if members is None:
                members = set()
                self._data[name] = members

            before = len(members)
            members.update(self._encode(v) for v in values)
            return len(members) - before

    async def smembers(self, name: str) -> set[str]:
        async with self._lock:
            members = self._lookup(name, set)
            return set(members) if members else set()

    # ------------ List commands ------------

    async def rpush(self, name: str, *values: Any) -> int:
        if not values:
            raise ResponseError("wrong number of arguments for 'rpush' command")

        async with self._lock:
            items = self._lookup(name, list)
            if items is None:
                items = []
                self._data[name] = items

            items.extend(self._encode(v) for v in values)
            return len(items)

    async def lrange(self, name: str, start: int, end: int) -> list[str]:
        async with self._lock:
            items = self._lookup(name, list)
            if not items:
                return []

            length = len(items)
            if start < 0:
                start = max(0, length + start)
            if end < 0:
                end = length + end
            end = min(end, length - 1)

            if start > end:
                return []
            return items[start : end + 1]

    async def llen(self, name: str) -> int:
        async with self._lock:
            items = self._lookup(name, list)
            return len(items) if items else 0

    async def rpop(self, name: str) -> str | None:
        async with self._lock:
            items = self._lookup(name, list)
            if not items:
                return None

            value = items.pop()
            if not items:
                self._remove(name)
            return value

    # ------------ Connection ------------

    async def ping(self) -> bool:
        return True

    async def flushdb(self) -> bool:
        async with self._lock:
            size = len(self._data)
            self._data.clear()
            self._expiry.clear()
            logger.debug(f"Flushed {size} keys from memory store")
            return True

    async def aclose(self) -> None:
        # Data lives in-process; nothing to release
        logger.debug("Memory store closed")
