"""
kvfacade — Cache Module

Store client interface, backends and the client factory.

Usage:
    from kvfacade.cache import create_facade

    facade = create_facade()
    await facade.set_with_expire("key", "value", 3600)
    value = await facade.get("key")
"""

from .backends.memory import MemoryStore
from .factory import (
    close_all_clients,
    create_facade,
    create_store_client,
    get_store_client,
    list_client_instances,
    reset_client_factory,
)
from .interface import StoreClient

__all__ = [
    # Factory functions
    "create_store_client",
    "create_facade",
    "get_store_client",
    "close_all_clients",
    "list_client_instances",
    "reset_client_factory",
    # Interface and in-process backend
    "StoreClient",
    "MemoryStore",
]
