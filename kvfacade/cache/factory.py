"""
kvfacade — Store Client Factory

Canonical factory for building store clients and facades from configuration.

Key points:
- One shared client per registry name, created at startup and passed into facades
- Backend toggle via env: CACHE_BACKEND=memory|redis
  - Defaults to redis when REDIS_URL is set, memory otherwise
- All configuration is typed and validated via Pydantic models

Examples:
    from kvfacade.cache.factory import create_facade, close_all_clients

    facade = create_facade()
    await facade.set_with_expire("key", "value", 60)
    ...
    await close_all_clients()

    # Or explicitly supply a FacadeConfig (e.g., for tests)
    from kvfacade.config import FacadeConfig, StoreBackend, StoreConfig
    cfg = FacadeConfig(store=StoreConfig(backend=StoreBackend.MEMORY, namespace="test"))
    facade = create_facade(cfg, name="test")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..config import FacadeConfig, StoreBackend, StoreConfig, get_config
from ..errors import ConfigurationError
from ..resilience.backoff import BackoffPolicy
from .backends.memory import MemoryStore
from .interface import StoreClient

if TYPE_CHECKING:
    from ..facade import CacheFacade

logger = logging.getLogger(__name__)

# Shared client registry
_client_instances: dict[str, StoreClient] = {}


def _create_redis_client(config: StoreConfig) -> StoreClient:
    """Internal helper to construct a redis client with lazy import."""
    if not config.redis_url:
        raise ConfigurationError(
            "REDIS_URL must be set when CACHE_BACKEND=redis",
            details={"env": "REDIS_URL", "backend": "redis"},
        )

    # Lazy import to avoid hard dependency when memory backend is used
    try:
        from .backends.redis import create_redis_client
    except ImportError as e:
        logger.error(
            "Redis backend selected but redis client is not installed",
            extra={"package": "redis>=5.0.0", "error": str(e)},
        )
        raise ConfigurationError(
            "Redis backend selected but redis client is unavailable. "
            "Install with: pip install 'redis>=5.0.0' or add to dependencies.",
            details={"package": "redis>=5.0.0", "error": str(e), "backend": "redis"},
        ) from e

    return create_redis_client(
        redis_url=config.redis_url,
        max_connections=config.redis_max_connections,
        socket_timeout=config.redis_socket_timeout,
    )


def create_store_client(
    config: FacadeConfig | None = None,
    name: str = "default",
) -> StoreClient:
    """
    Create (or return the already registered) store client.

    Args:
        config: Configuration (uses global config if not provided)
        name: Registry name, for processes talking to more than one store

    Returns:
        Configured store client

    Raises:
        ConfigurationError: If configuration is invalid or backend unavailable
    """
    if name in _client_instances:
        logger.debug("Returning existing store client: %s", name)
        return _client_instances[name]

    if config is None:
        config = get_config()
    store = config.store

    logger.info(
        "Creating store client '%s' with backend: %s",
        name,
        store.backend,
        extra={"client_name": name, "backend": str(store.backend)},
    )

    try:
        if store.backend == StoreBackend.MEMORY:
            client: StoreClient = MemoryStore()
        elif store.backend == StoreBackend.REDIS:
            client = _create_redis_client(store)
        else:
            raise ConfigurationError(
                f"Unknown store backend: {store.backend}",
                details={"backend": str(store.backend), "supported": ["memory", "redis"]},
            )
    except ConfigurationError:
        raise
    except Exception as e:
        logger.error(
            "Unexpected error creating store client '%s': %s",
            name,
            e,
            extra={"client_name": name, "backend": str(store.backend), "error": str(e)},
            exc_info=True,
        )
        raise ConfigurationError(
            f"Failed to create store client '{name}': {e}",
            details={"client_name": name, "backend": str(store.backend), "error": str(e)},
        ) from e

    _client_instances[name] = client
    return client


def get_store_client(name: str = "default") -> StoreClient:
    """
    Get a registered store client by name, creating it from global config if needed.
    """
    if name not in _client_instances:
        logger.debug("Store client '%s' not found, creating new instance", name)
        return create_store_client(name=name)

    return _client_instances[name]


def create_facade(
    config: FacadeConfig | None = None,
    name: str = "default",
) -> CacheFacade:
    """
    Build a facade over the shared client registered under ``name``.

    Facades hold no state, so a new one is returned on every call.
    """
    # facade imports this package, so it is resolved at call time
    from ..facade import CacheFacade

    if config is None:
        config = get_config()

    lock = config.lock
    backoff = BackoffPolicy(
        attempts=lock.retry_count,
        interval=lock.retry_interval_ms / 1000,
        jitter=lock.jitter,
    )
    return CacheFacade(
        create_store_client(config, name=name),
        namespace=config.store.namespace,
        backoff=backoff,
        lock_ttl=lock.ttl_seconds,
    )


async def close_all_clients() -> None:
    """
    Close all registered store clients and release resources.

    Call during graceful shutdown.
    """
    if not _client_instances:
        logger.debug("No store clients to close")
        return

    logger.info("Closing %d store client(s)...", len(_client_instances))

    for name, client in list(_client_instances.items()):
        try:
            await client.aclose()
            logger.info("Closed store client: %s", name)
        except Exception as e:
            logger.error(
                "Error closing store client '%s': %s",
                name,
                e,
                extra={"client_name": name, "error": str(e)},
                exc_info=True,
            )

    _client_instances.clear()


def reset_client_factory() -> None:
    """
    Forget all registered clients without closing them.

    Warning: Only use this in testing contexts.
    """
    count = len(_client_instances)
    _client_instances.clear()
    logger.debug("Reset client factory, cleared %d instance reference(s)", count)


def list_client_instances() -> list[str]:
    """List all registered client names."""
    return list(_client_instances.keys())
