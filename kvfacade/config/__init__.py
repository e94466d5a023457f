"""
kvfacade — Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config
from .schemas import (
    Environment,
    FacadeConfig,
    LockConfig,
    LoggingConfig,
    LogLevel,
    StoreBackend,
    StoreConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    # Main config
    "FacadeConfig",
    # Enums
    "Environment",
    "StoreBackend",
    "LogLevel",
    # Config sections
    "StoreConfig",
    "LockConfig",
    "LoggingConfig",
]
