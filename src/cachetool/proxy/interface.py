"""
CacheTool — Proxy Interface

Defines the contract every proxy implements.

A proxy is a capability module: it reports the names of the functions it
provides and exposes one method per name. The facade wires the adapter in
lazily, right before harvesting the function names.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..adapter.base import AbstractAdapter
from ..code import Code
from ..errors import AdapterNotSetError


class ProxyInterface(ABC):
    """Abstract base class for proxies."""

    @abstractmethod
    def get_functions(self) -> list[str]:
        """
        Return the names of the functions this proxy provides.

        Each name must be the name of a callable attribute of the proxy.
        """
        pass

    @abstractmethod
    def set_adapter(self, adapter: AbstractAdapter | None) -> None:
        """
        Set the adapter used to execute functions.

        Args:
            adapter: Adapter instance, or None when the facade has none yet
        """
        pass


class AbstractProxy(ProxyInterface):
    """Proxy base that runs Code through the wired adapter."""

    def __init__(self) -> None:
        self.adapter: AbstractAdapter | None = None

    def set_adapter(self, adapter: AbstractAdapter | None) -> None:
        self.adapter = adapter

    def get_adapter(self) -> AbstractAdapter | None:
        return self.adapter

    def _run(self, code: Code) -> Any:
        """
        Execute code through the adapter.

        Raises:
            AdapterNotSetError: If no adapter has been wired in
        """
        if self.adapter is None:
            raise AdapterNotSetError(self.__class__.__name__)
        return self.adapter.run(code)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"{self.__class__.__name__}(functions={len(self.get_functions())})"
