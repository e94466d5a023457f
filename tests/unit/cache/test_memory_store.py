"""
kvfacade — Memory Store Tests

Checks that the in-process store follows Redis semantics for the commands
the facade uses: TTLs, conditional writes, data types and list indexing.
"""

import pytest
from redis.exceptions import ResponseError

from kvfacade.cache.backends.memory import MemoryStore
from kvfacade.cache.interface import StoreClient


class TestMemoryStore:
    """Test suite for MemoryStore."""

    def test_satisfies_store_client_protocol(self, store: MemoryStore) -> None:
        assert isinstance(store, StoreClient)

    async def test_set_and_get(self, store: MemoryStore) -> None:
        assert await store.set("key1", "value1") is True
        assert await store.get("key1") == "value1"

    async def test_get_nonexistent_key(self, store: MemoryStore) -> None:
        assert await store.get("missing") is None

    async def test_values_are_stored_as_strings(self, store: MemoryStore) -> None:
        await store.set("int", 42)
        await store.set("bytes", b"raw")

        assert await store.get("int") == "42"
        assert await store.get("bytes") == "raw"

    async def test_set_nx_only_writes_absent_keys(self, store: MemoryStore) -> None:
        assert await store.set("lock", "first", nx=True) is True
        assert await store.set("lock", "second", nx=True) is None
        assert await store.get("lock") == "first"

    async def test_set_nx_succeeds_after_expiry(self, store: MemoryStore, clock) -> None:
        await store.set("lock", "first", ex=2, nx=True)
        clock.advance(2)

        assert await store.set("lock", "second", nx=True) is True
        assert await store.get("lock") == "second"

    async def test_set_rejects_non_positive_expiry(self, store: MemoryStore) -> None:
        with pytest.raises(ResponseError):
            await store.set("key1", "value1", ex=0)

    async def test_set_clears_previous_ttl(self, store: MemoryStore) -> None:
        await store.set("key1", "value1", ex=30)
        assert await store.ttl("key1") == 30

        await store.set("key1", "value2")
        assert await store.ttl("key1") == -1

    async def test_ttl_states(self, store: MemoryStore, clock) -> None:
        assert await store.ttl("missing") == -2

        await store.set("forever", "v")
        assert await store.ttl("forever") == -1

        await store.set("short", "v", ex=10)
        clock.advance(4)
        assert await store.ttl("short") == 6

    async def test_expire_and_lazy_expiry(self, store: MemoryStore, clock) -> None:
        await store.set("key1", "value1")
        assert await store.expire("key1", 5) is True

        clock.advance(4)
        assert await store.exists("key1") == 1

        clock.advance(1)
        assert await store.exists("key1") == 0
        assert await store.get("key1") is None

    async def test_expire_missing_key(self, store: MemoryStore) -> None:
        assert await store.expire("missing", 5) is False

    async def test_expire_non_positive_deletes(self, store: MemoryStore) -> None:
        await store.set("key1", "value1")
        assert await store.expire("key1", 0) is True
        assert await store.exists("key1") == 0

    async def test_delete_and_exists_count_keys(self, store: MemoryStore) -> None:
        await store.set("a", "1")
        await store.set("b", "2")

        assert await store.exists("a", "b", "c") == 2
        assert await store.delete("a", "c") == 1
        assert await store.delete("a") == 0
        assert await store.exists("a", "b") == 1

    async def test_sadd_counts_new_members(self, store: MemoryStore) -> None:
        assert await store.sadd("tags", "a", "b") == 2
        assert await store.sadd("tags", "a", "c") == 1
        assert await store.smembers("tags") == {"a", "b", "c"}

    async def test_smembers_missing_key(self, store: MemoryStore) -> None:
        assert await store.smembers("missing") == set()

    async def test_smembers_returns_copy(self, store: MemoryStore) -> None:
        await store.sadd("tags", "a")
        members = await store.smembers("tags")
        members.add("b")

        assert await store.smembers("tags") == {"a"}

    async def test_variadic_commands_require_values(self, store: MemoryStore) -> None:
        with pytest.raises(ResponseError):
            await store.sadd("tags")
        with pytest.raises(ResponseError):
            await store.rpush("items")

    async def test_rpush_lrange_llen(self, store: MemoryStore) -> None:
        assert await store.rpush("items", "a", "b") == 2
        assert await store.rpush("items", "c") == 3

        assert await store.lrange("items", 0, -1) == ["a", "b", "c"]
        assert await store.llen("items") == 3

    @pytest.mark.parametrize(
        ("start", "end", "expected"),
        [
            (0, 0, ["a"]),
            (1, 2, ["b", "c"]),
            (-2, -1, ["c", "d"]),
            (0, 100, ["a", "b", "c", "d"]),
            (-100, 1, ["a", "b"]),
            (3, 1, []),
            (10, 20, []),
        ],
    )
    async def test_lrange_indexing(self, store: MemoryStore, start: int, end: int, expected: list[str]) -> None:
        await store.rpush("items", "a", "b", "c", "d")
        assert await store.lrange("items", start, end) == expected

    async def test_rpop_removes_emptied_list(self, store: MemoryStore) -> None:
        await store.rpush("items", "a", "b")

        assert await store.rpop("items") == "b"
        assert await store.rpop("items") == "a"
        assert await store.rpop("items") is None
        assert await store.exists("items") == 0
        assert await store.llen("items") == 0

    async def test_wrong_type_raises(self, store: MemoryStore) -> None:
        await store.set("scalar", "value")
        await store.rpush("items", "a")

        with pytest.raises(ResponseError, match="WRONGTYPE"):
            await store.rpush("scalar", "x")
        with pytest.raises(ResponseError, match="WRONGTYPE"):
            await store.llen("scalar")
        with pytest.raises(ResponseError, match="WRONGTYPE"):
            await store.get("items")
        with pytest.raises(ResponseError, match="WRONGTYPE"):
            await store.sadd("items", "x")

    async def test_set_overwrites_any_type(self, store: MemoryStore) -> None:
        await store.rpush("items", "a")
        await store.set("items", "scalar")
        assert await store.get("items") == "scalar"

    async def test_flushdb_and_close(self, store: MemoryStore) -> None:
        await store.set("a", "1")
        await store.sadd("b", "x")

        assert await store.flushdb() is True
        assert await store.exists("a", "b") == 0
        assert await store.ping() is True
        await store.aclose()
