"""
kvfacade — Cache Facade

Typed value, set and list operations over a key-value store client, plus an
exclusive set-with-expire used as a "first writer wins" guard.

Every store interaction is contained: errors are logged with the key (and
value, where there is one) and mapped to False, None, an empty collection or
0. Callers that need to tell absence from failure use the ``*_result``
methods, which return a ``CacheResult`` instead.

Example:
    facade = CacheFacade(create_redis_client("redis://localhost:6379/0"))
    if await facade.set_exclusive_with_expire("job:42:owner", worker_id):
        ...
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from .cache.interface import StoreClient
from .errors import ErrorCode, classify_store_error
from .resilience.backoff import BackoffPolicy
from .result import CacheResult

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TTL = 9
NO_EXPIRY = -1


def _coerce(value: Any) -> str:
    """Store values are strings; bytes are decoded, everything else goes through str()."""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _members(values: Any) -> list[str]:
    """Expand a single value or an iterable of values into string elements."""
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        return [_coerce(values)]
    return [_coerce(v) for v in values]


class CacheFacade:
    """
    Stateless facade over a ``StoreClient``.

    Notes:
    - The client is passed in and shared; the facade never creates or closes it.
    - Keys are prefixed with ``namespace`` when one is set.
    - A TTL is applied only when ``ttl_seconds > 0``.
    - Write-then-expire is two round trips, not a transaction.
    """

    def __init__(
        self,
        client: StoreClient,
        namespace: str = "",
        backoff: BackoffPolicy | None = None,
        lock_ttl: int = DEFAULT_LOCK_TTL,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ) -> None:
        """
        Initialize the facade.

        Args:
            client: Store client (a ``redis.asyncio.Redis`` or ``MemoryStore``)
            namespace: Key prefix; empty means keys are used verbatim
            backoff: Retry schedule for the exclusive set (default: 10 retries, 5 ms apart)
            lock_ttl: Default TTL in seconds for the exclusive set
            sleep: Coroutine function used to wait between retries (default: asyncio.sleep)
        """
        if lock_ttl <= 0:
            raise ValueError("lock_ttl must be positive")

        self._client = client
        self.namespace = namespace.strip()
        self.backoff = backoff or BackoffPolicy()
        self.lock_ttl = lock_ttl
        self._sleep = sleep or asyncio.sleep

    # ------------ Helpers ------------

    def _make_key(self, key: str) -> str:
        """Create namespaced key."""
        if not self.namespace:
            return key
        return f"{self.namespace}:{key}"

    def _log_failure(self, action: str, key: str, error: Exception, value: Any = None) -> ErrorCode:
        error_code = classify_store_error(error)
        logger.error(
            f"Failed to {action} key '{key}': {error}",
            extra={
                "key": key,
                "value": value,
                "namespace": self.namespace,
                "error_code": error_code.value,
                "error": str(error),
            },
            exc_info=True,
        )
        return error_code

    async def _apply_ttl(self, ns_key: str, ttl_seconds: int) -> bool:
        """Set a TTL when one is requested. True if none was requested or it was applied."""
        if ttl_seconds <= 0:
            return True
        return bool(await self._client.expire(ns_key, ttl_seconds))

    # ------------ Scalar values ------------

    async def set_with_expire(self, key: str, value: Any, ttl_seconds: int) -> bool:
        """
        Write a value and, if ``ttl_seconds > 0``, give the key a TTL.

        Returns:
            True only if the write and any requested TTL both succeeded
        """
        payload = _coerce(value)
        try:
            ns_key = self._make_key(key)
            if not await self._client.set(ns_key, payload):
                return False
            return await self._apply_ttl(ns_key, ttl_seconds)
        except Exception as e:
            self._log_failure("set", key, e, value=payload)
            return False

    async def cache_value(self, key: str, value: Any) -> bool:
        """Write a value without expiry."""
        return await self.set_with_expire(key, value, NO_EXPIRY)

    async def set_exclusive_with_expire(
        self,
        key: str,
        value: Any,
        retry_count: int | None = None,
        ttl_seconds: int | None = None,
    ) -> bool:
        """
        Write a value only if the key is absent, retrying while another writer holds it.

        The same conditional write is retried up to ``retry_count`` times,
        waiting the backoff interval between attempts so the current holder
        can remove the key or let it expire. The TTL is set atomically with
        the winning write.

        Args:
            key: Key to claim
            value: Value to store
            retry_count: Retries after the first attempt; None or <= 0 uses the facade backoff policy
            ttl_seconds: TTL of the claimed key; None or <= 0 uses the facade default

        Returns:
            True if this call wrote the key, False if every attempt lost or the store failed
        """
        policy = self.backoff if retry_count is None or retry_count <= 0 else self.backoff.with_attempts(retry_count)
        ttl = ttl_seconds if ttl_seconds is not None and ttl_seconds > 0 else self.lock_ttl
        payload = _coerce(value)

        try:
            ns_key = self._make_key(key)
            for attempt in range(policy.attempts + 1):
                if await self._client.set(ns_key, payload, ex=ttl, nx=True):
                    if attempt:
                        logger.debug(
                            f"Exclusive set of '{key}' succeeded after {attempt} retries",
                            extra={"key": key, "attempt": attempt},
                        )
                    return True

                if attempt < policy.attempts:
                    await self._sleep(policy.delay(attempt))

            logger.info(
                f"Exclusive set of '{key}' gave up after {policy.attempts} retries",
                extra={"key": key, "value": payload, "error_code": ErrorCode.CONTENTION.value},
            )
            return False
        except Exception as e:
            self._log_failure("exclusively set", key, e, value=payload)
            return False

    async def get_result(self, key: str) -> CacheResult[str]:
        """Read a scalar value, separating a missing key from a store failure."""
        try:
            value = await self._client.get(self._make_key(key))
        except Exception as e:
            return CacheResult.store_error(e, self._log_failure("get", key, e))

        if value is None:
            return CacheResult.not_found()
        return CacheResult.ok(value)

    async def get(self, key: str) -> str | None:
        """Read a scalar value. None when the key is missing or the store failed."""
        return (await self.get_result(key)).value

    async def contains_key_result(self, key: str) -> CacheResult[bool]:
        """Existence check, separating an absent key from a store failure."""
        try:
            found = await self._client.exists(self._make_key(key))
        except Exception as e:
            return CacheResult.store_error(e, self._log_failure("check existence of", key, e))

        if not found:
            return CacheResult.not_found()
        return CacheResult.ok(True)

    async def contains_key(self, key: str) -> bool:
        """Existence check. False when absent or when the store failed."""
        return (await self.contains_key_result(key)).is_ok

    # ------------ Removal ------------

    async def remove(self, key: str) -> bool:
        """
        Delete a key of any type.

        Idempotent: deleting an absent key still returns True.
        """
        try:
            await self._client.delete(self._make_key(key))
            return True
        except Exception as e:
            self._log_failure("remove", key, e)
            return False

    async def remove_value(self, key: str) -> bool:
        return await self.remove(key)

    async def remove_set(self, key: str) -> bool:
        return await self.remove(key)

    async def remove_list(self, key: str) -> bool:
        return await self.remove(key)

    # ------------ Sets ------------

    async def append_to_set(self, key: str, values: Any, ttl_seconds: int = NO_EXPIRY) -> bool:
        """
        Add one value or an iterable of values to the set at ``key``.

        Members already present are not duplicated. An empty iterable writes nothing.
        """
        members = _members(values)
        if not members:
            return True

        try:
            ns_key = self._make_key(key)
            await self._client.sadd(ns_key, *members)
            return await self._apply_ttl(ns_key, ttl_seconds)
        except Exception as e:
            self._log_failure("add to set", key, e, value=members)
            return False

    async def cache_set(self, key: str, values: Any) -> bool:
        """Add to a set without expiry."""
        return await self.append_to_set(key, values, NO_EXPIRY)

    async def get_set(self, key: str) -> set[str]:
        """All members of the set at ``key``; empty when missing or on failure."""
        try:
            return set(await self._client.smembers(self._make_key(key)))
        except Exception as e:
            self._log_failure("read set", key, e)
            return set()

    # ------------ Lists ------------

    async def append_to_list(self, key: str, values: Any, ttl_seconds: int = NO_EXPIRY) -> bool:
        """Push one value or an ordered iterable of values onto the tail of the list at ``key``."""
        items = _members(values)
        if not items:
            return True

        try:
            ns_key = self._make_key(key)
            await self._client.rpush(ns_key, *items)
            return await self._apply_ttl(ns_key, ttl_seconds)
        except Exception as e:
            self._log_failure("append to list", key, e, value=items)
            return False

    async def cache_list(self, key: str, values: Any) -> bool:
        """Append to a list without expiry."""
        return await self.append_to_list(key, values, NO_EXPIRY)

    async def get_range(self, key: str, start: int, end: int) -> list[str]:
        """
        Elements between ``start`` and ``end`` inclusive.

        Negative indices count from the tail, so ``(0, -1)`` is the whole list.
        Empty when missing or on failure.
        """
        try:
            return list(await self._client.lrange(self._make_key(key), start, end))
        except Exception as e:
            self._log_failure("read range of", key, e, value={"start": start, "end": end})
            return []

    async def size_result(self, key: str) -> CacheResult[int]:
        """List length, separating a missing list from a store failure."""
        try:
            length = int(await self._client.llen(self._make_key(key)))
        except Exception as e:
            return CacheResult.store_error(e, self._log_failure("read size of", key, e))

        # The store removes emptied lists, so zero means absent
        if length == 0:
            return CacheResult.not_found()
        return CacheResult.ok(length)

    async def size(self, key: str) -> int:
        """List length; 0 when absent, empty, or on failure."""
        return (await self.size_result(key)).unwrap_or(0)

    async def pop_tail(self, key: str) -> bool:
        """
        Remove and discard the tail element of the list at ``key``.

        True whenever the command ran, including on an empty list.
        """
        try:
            await self._client.rpop(self._make_key(key))
            return True
        except Exception as e:
            self._log_failure("pop tail of", key, e)
            return False

    # ------------ Connection ------------

    async def ping(self) -> bool:
        """Check the store is reachable."""
        try:
            return bool(await self._client.ping())
        except Exception as e:
            logger.warning(
                f"Store ping failed: {e}",
                extra={"namespace": self.namespace, "error_code": classify_store_error(e).value},
            )
            return False
