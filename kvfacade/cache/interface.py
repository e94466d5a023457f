"""
kvfacade — Store Client Interface

Defines the store commands the facade consumes.

The protocol is structural: ``redis.asyncio.Redis`` satisfies it as-is, and
``MemoryStore`` implements the same subset in-process. Method names and
return conventions follow redis-py.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StoreClient(Protocol):
    """
    Async key-value store capability.

    Every command is atomic at the store. Nothing is assumed about atomicity
    across two commands.
    """

    async def get(self, name: str) -> Any | None:
        """
        Return the scalar value stored at ``name``.

        Returns:
            The value, or None if the key does not exist
        """
        ...

    async def set(
        self,
        name: str,
        value: Any,
        ex: int | None = None,
        nx: bool = False,
    ) -> bool | None:
        """
        Store a scalar value, replacing any previous value and TTL.

        Args:
            name: Key
            value: Value to store
            ex: Expiry in seconds
            nx: Only write when the key does not exist

        Returns:
            True when written, None when ``nx`` prevented the write
        """
        ...

    async def delete(self, *names: str) -> int:
        """Delete keys, returning how many existed."""
        ...

    async def exists(self, *names: str) -> int:
        """Count how many of the given keys exist."""
        ...

    async def expire(self, name: str, time: int) -> bool:
        """Set a TTL in seconds. Returns False if the key does not exist."""
        ...

    async def ttl(self, name: str) -> int:
        """Remaining TTL in seconds, -1 without expiry, -2 if missing."""
        ...

    async def sadd(self, name: str, *values: Any) -> int:
        """Add members to a set, returning how many were new."""
        ...

    async def smembers(self, name: str) -> Any:
        """Return all members of a set."""
        ...

    async def rpush(self, name: str, *values: Any) -> int:
        """Append values to the tail of a list, returning the new length."""
        ...

    async def lrange(self, name: str, start: int, end: int) -> list[Any]:
        """Return list elements between two inclusive indices."""
        ...

    async def llen(self, name: str) -> int:
        """Return the length of a list."""
        ...

    async def rpop(self, name: str) -> Any | None:
        """Remove and return the tail element of a list."""
        ...

    async def ping(self) -> bool:
        """Check connectivity."""
        ...

    async def aclose(self) -> None:
        """Close the client and release resources."""
        ...
