"""
CacheTool — Adapters

Connections to the runtime that proxy code is executed in.

- AbstractAdapter: base class (logger/temp dir wiring, result decoding)
- LocalAdapter: runs code in the current interpreter
- CliAdapter: runs code in a subprocess interpreter
- create_adapter(): builds an adapter from AdapterConfig
"""

from .base import AbstractAdapter
from .cli import CliAdapter
from .factory import create_adapter, get_supported_adapters
from .local import LocalAdapter

__all__ = [
    "AbstractAdapter",
    "CliAdapter",
    "LocalAdapter",
    "create_adapter",
    "get_supported_adapters",
]
