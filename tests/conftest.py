"""
kvfacade — Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import os
from collections.abc import AsyncGenerator, Generator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from redis.asyncio import Redis

from kvfacade.cache.backends.memory import MemoryStore
from kvfacade.facade import CacheFacade

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"

STORE_COMMANDS = (
    "get",
    "set",
    "delete",
    "exists",
    "expire",
    "ttl",
    "sadd",
    "smembers",
    "rpush",
    "lrange",
    "llen",
    "rpop",
    "ping",
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Async sleep stand-in that records requested delays without waiting."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> MemoryStore:
    """Fresh memory store driven by the fake clock."""
    return MemoryStore(clock=clock)


@pytest.fixture
def sleeper() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def facade(store: MemoryStore, sleeper: RecordingSleep) -> CacheFacade:
    """Facade over the memory store with instant retries."""
    return CacheFacade(store, sleep=sleeper)


@pytest.fixture
def broken_client() -> AsyncMock:
    """Store client whose every command fails as if the server were down."""
    from redis.exceptions import ConnectionError as RedisConnectionError

    client = AsyncMock()
    for command in STORE_COMMANDS:
        getattr(client, command).side_effect = RedisConnectionError("Connection refused")
    return client


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest_asyncio.fixture
async def redis_client(test_redis_url: str) -> AsyncGenerator[Redis, None]:
    """
    Create a Redis client for testing.

    Automatically skips tests if Redis is not available.
    Clears the test database before and after each test.
    """
    client: Redis = Redis.from_url(test_redis_url, decode_responses=True)

    try:
        await client.ping()
    except Exception as e:
        await client.aclose()
        pytest.skip(f"Redis not available for testing: {e}")

    await client.flushdb()

    yield client

    try:
        await client.flushdb()
    finally:
        await client.aclose()


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None, None, None]:
    """Reset client registry and config singleton after each test to prevent state leakage."""
    yield
    from kvfacade.cache.factory import reset_client_factory
    from kvfacade.config import loader

    reset_client_factory()
    loader._config_instance = None
