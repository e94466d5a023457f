"""
kvfacade — Key-Value Cache Facade

Value, set and list operations over Redis with errors contained at the
facade boundary, plus an exclusive set-with-expire for "first writer wins"
coordination.
"""

from .cache import MemoryStore, StoreClient, close_all_clients, create_facade, create_store_client
from .errors import ConfigurationError, ErrorCode, FacadeError
from .facade import CacheFacade
from .resilience import BackoffPolicy
from .result import CacheResult, ResultStatus

__version__ = "1.0.0"

__all__ = [
    "CacheFacade",
    "CacheResult",
    "ResultStatus",
    "BackoffPolicy",
    "StoreClient",
    "MemoryStore",
    "create_facade",
    "create_store_client",
    "close_all_clients",
    "ErrorCode",
    "FacadeError",
    "ConfigurationError",
]
