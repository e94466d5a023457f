"""
kvfacade — Redis Store Backend

Builds the pooled asyncio Redis client that the facade issues commands
through. The client is created once and shared; it connects lazily on the
first command.

Requires: redis>=5.0 with asyncio support

Example:
    client = create_redis_client("redis://localhost:6379/0")
    facade = CacheFacade(client, namespace="orders")
    await facade.set_with_expire("greeting", "hello", 60)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

try:
    # redis-py asyncio client (v4+)
    from redis.asyncio import Redis
except ImportError as e:  # pragma: no cover
    raise ImportError(
        "Redis async client is required but not installed. "
        "Install with: pip install 'redis>=5.0.0' or add 'redis' to your dependencies."
    ) from e


def create_redis_client(
    redis_url: str,
    max_connections: int = 10,
    socket_timeout: int = 5,
    decode_responses: bool = True,
) -> Redis:
    """
    Create an asyncio Redis client backed by a connection pool.

    Args:
        redis_url: Connection URL, e.g., redis://localhost:6379/0 or rediss:// for TLS
        max_connections: Connection pool size
        socket_timeout: Socket timeout in seconds
        decode_responses: If True, values are returned as str, not bytes

    Returns:
        Redis client (not yet connected)
    """
    if not redis_url:
        raise ValueError("redis_url is required")

    # from_url overloads on decode_responses
    client = Redis.from_url(  # type: ignore[call-overload]
        url=redis_url,
        decode_responses=decode_responses,
        max_connections=max_connections,
        socket_timeout=socket_timeout,
    )
    logger.debug(
        "Created Redis client",
        extra={"max_connections": max_connections, "socket_timeout": socket_timeout},
    )
    return client


async def close_redis_client(client: Redis) -> None:
    """Close the Redis client and release pooled connections."""
    try:
        await client.aclose()
        logger.info("Closed Redis client")
    except Exception as e:
        logger.error(f"Error closing Redis client: {e}", extra={"error": str(e)}, exc_info=True)
    finally:
        try:
            await client.connection_pool.disconnect()
        except Exception as e:
            logger.warning(f"Error disconnecting Redis connection pool: {e}", extra={"error": str(e)})
