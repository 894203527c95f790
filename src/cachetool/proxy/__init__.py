"""
CacheTool — Proxies

Capability modules whose functions are aggregated by the CacheTool facade.

- ProxyInterface / AbstractProxy: proxy contract and Code-running base
- MemoryCacheProxy: lru_cache, re, linecache, importer and module caches
- RuntimeProxy: interpreter introspection
- BytecodeProxy: __pycache__ bytecode control
- RedisProxy: Redis server control
"""

from .bytecode import BytecodeProxy
from .interface import AbstractProxy, ProxyInterface
from .memory import MemoryCacheProxy
from .redis import RedisProxy
from .runtime import RuntimeProxy

__all__ = [
    "AbstractProxy",
    "BytecodeProxy",
    "MemoryCacheProxy",
    "ProxyInterface",
    "RedisProxy",
    "RuntimeProxy",
]
