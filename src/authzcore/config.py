"""Configuration contract for authzcore.

Pydantic-validated settings shared by the logging setup and the Redis-backed
stores. Direct os.environ/os.getenv usage is limited to
``load_config_from_env()``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AuthzConfig(BaseModel):
    """Settings for the authorization core.

    Environment variables:
        LOG_LEVEL: logging level
        LOG_JSON: JSON log format (true/false)
        REDIS_URL: Redis URL for the Redis-backed stores
        AUTHZ_KEY_PREFIX: key prefix for store documents in Redis
        SERVICE_NAME: service name used as logger name
    """

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level for the service",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )

    # Redis stores
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL (e.g., redis://localhost:6379/0)",
    )
    key_prefix: str = Field(
        default="authz",
        description="Prefix for every store key in Redis",
    )

    service_name: Optional[str] = Field(
        default=None,
        description="Service name for log identification",
    )

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate Redis URL format."""
        if v is None:
            return v
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError("Redis URL must start with redis://, rediss://, or unix://")
        return v

    @field_validator("key_prefix")
    @classmethod
    def validate_key_prefix(cls, v: str) -> str:
        v = v.strip().rstrip(":")
        if not v:
            raise ValueError("Key prefix must not be empty")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


def load_config_from_env() -> AuthzConfig:
    """Load configuration from environment variables.

    This is the ONLY place where os.getenv is allowed.

    Returns:
        AuthzConfig instance with values from environment or defaults.
    """
    import os

    return AuthzConfig(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_json=os.getenv("LOG_JSON", "false").lower() in ("true", "1", "yes"),
        redis_url=os.getenv("REDIS_URL"),
        key_prefix=os.getenv("AUTHZ_KEY_PREFIX", "authz"),
        service_name=os.getenv("SERVICE_NAME"),
    )


__all__ = [
    "AuthzConfig",
    "LogLevel",
    "load_config_from_env",
]
