"""
kvfacade — Configuration Schemas

Typed configuration models using Pydantic for validation and type safety.
All configuration is defined here and validated when it is loaded.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Environment(str, Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class StoreBackend(str, Enum):
    """Supported store backends."""

    MEMORY = "memory"
    REDIS = "redis"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StoreConfig(BaseModel):
    """Store client configuration."""

    backend: StoreBackend = Field(default=StoreBackend.MEMORY, description="Store backend to use")
    namespace: str = Field(default="", description="Key prefix; empty means keys are used verbatim")

    # Redis-specific settings (only used when backend=redis)
    redis_url: str | None = Field(default=None, validate_default=True, description="Redis connection URL")
    redis_max_connections: int = Field(default=10, ge=1, description="Redis connection pool size")
    redis_socket_timeout: int = Field(default=5, ge=1, description="Redis socket timeout in seconds")

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: str | None, info: Any) -> str | None:
        """Ensure redis_url is provided when backend is redis."""
        backend = info.data.get("backend")
        if backend == StoreBackend.REDIS and not v:
            raise ValueError("redis_url is required when store backend is 'redis'")
        return v


class LockConfig(BaseModel):
    """Exclusive set (first writer wins) configuration."""

    retry_count: int = Field(default=10, ge=1, description="Retries after the first conditional write")
    retry_interval_ms: int = Field(default=5, ge=0, description="Sleep between attempts in milliseconds")
    ttl_seconds: int = Field(default=9, ge=1, description="TTL applied to a successfully written key")
    jitter: bool = Field(default=False, description="Randomize the retry interval")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    json_format: bool = Field(default=False, description="Emit JSON log lines")


class FacadeConfig(BaseModel):
    """Root configuration for kvfacade."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Runtime environment")

    store: StoreConfig = Field(default_factory=StoreConfig)
    lock: LockConfig = Field(default_factory=LockConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
