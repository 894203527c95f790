"""
CacheTool — Configuration Schemas

Defines typed configuration models using Pydantic for validation and type safety.
All configuration is defined here and validated when loaded.
"""

import sys
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    NOTICE = "NOTICE"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    TEXT = "text"
    JSON = "json"


class AdapterKind(str, Enum):
    """Supported adapters."""

    LOCAL = "local"
    CLI = "cli"


class AdapterConfig(BaseModel):
    """Adapter configuration."""

    kind: AdapterKind = Field(default=AdapterKind.LOCAL, description="Adapter used to run proxy code")
    python_executable: str = Field(
        default_factory=lambda: sys.executable,
        description="Interpreter used by the cli adapter",
    )
    timeout: float = Field(default=30.0, gt=0, description="Subprocess timeout in seconds (cli adapter)")

    @field_validator("python_executable")
    @classmethod
    def validate_python_executable(cls, v: str) -> str:
        """Ensure the interpreter path is not blank."""
        if not v.strip():
            raise ValueError("python_executable cannot be empty")
        return v


class RedisConfig(BaseModel):
    """Redis proxy configuration."""

    url: str | None = Field(default=None, description="Redis connection URL (enables the redis proxy)")
    socket_timeout: int = Field(default=5, ge=1, description="Redis socket timeout in seconds")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """Accept only redis:// style URLs."""
        if v is None or not v.strip():
            return None
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError("redis url must start with redis://, rediss:// or unix://")
        return v


class CacheToolConfig(BaseModel):
    """Root configuration for CacheTool."""

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.TEXT, description="Log output format")
    temp_dir: str | None = Field(default=None, description="Working directory (resolved when unset)")

    adapter: AdapterConfig = Field(default_factory=AdapterConfig)
    redis: RedisConfig = Field(default_factory=RedisConfig)

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
