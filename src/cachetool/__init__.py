"""
CacheTool — cache and runtime control facade

Aggregates proxies (memory caches, bytecode cache, interpreter, Redis) and
dispatches calls to their functions through a pluggable adapter.
"""

__version__ = "1.0.0"

from .adapter import AbstractAdapter, CliAdapter, LocalAdapter
from .code import Code
from .errors import CacheToolError, ConfigurationError, FunctionNotFoundError
from .factory import create_cachetool
from .proxy import (
    AbstractProxy,
    BytecodeProxy,
    MemoryCacheProxy,
    ProxyInterface,
    RedisProxy,
    RuntimeProxy,
)
from .tool import CacheTool

__all__ = [
    "CacheTool",
    "create_cachetool",
    "Code",
    # Adapters
    "AbstractAdapter",
    "CliAdapter",
    "LocalAdapter",
    # Proxies
    "AbstractProxy",
    "BytecodeProxy",
    "MemoryCacheProxy",
    "ProxyInterface",
    "RedisProxy",
    "RuntimeProxy",
    # Errors
    "CacheToolError",
    "ConfigurationError",
    "FunctionNotFoundError",
]
