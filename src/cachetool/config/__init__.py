"""
CacheTool — Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config, reset_config
from .schemas import (
    AdapterConfig,
    AdapterKind,
    CacheToolConfig,
    LogFormat,
    LogLevel,
    RedisConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    "reset_config",
    # Main config
    "CacheToolConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    "AdapterKind",
    # Config sections
    "AdapterConfig",
    "RedisConfig",
]
