"""
CacheTool — Facade

Aggregates proxies and dispatches calls to their functions by name.

The facade owns at most one adapter, an ordered list of proxies and a lazily
built function table mapping each function name to the proxy providing it.
The table is dropped whenever a proxy is added and rebuilt on the next lookup;
when several proxies declare the same name, the last one registered wins.

Usage:
    from cachetool import CacheTool, LocalAdapter

    cachetool = CacheTool.factory(LocalAdapter())
    cachetool.call("python_version")
    cachetool.call("lru_cache_info", "myapp\\.")
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from .adapter.base import AbstractAdapter
from .errors import ConfigurationError, FunctionNotFoundError
from .observability import NOTICE, generate_call_id, get_default_logger, reset_call_id, set_call_id
from .proxy.interface import ProxyInterface

# Tried in order before the platform default temp directory
FAST_TEMP_DIRS: tuple[str, ...] = ("/dev/shm", "/var/run")

LoggerLike = logging.Logger | logging.LoggerAdapter


class CacheTool:
    """Facade over an adapter and a set of proxies."""

    def __init__(self, temp_dir: str | None = None, logger: LoggerLike | None = None) -> None:
        """
        Initialize the facade.

        Args:
            temp_dir: Working directory for adapters (resolved when None)
            logger: Logger shared with the adapter (library logger when None)

        Raises:
            ConfigurationError: If the working directory cannot be created or written
        """
        self._logger: LoggerLike = logger or get_default_logger()
        self._adapter: AbstractAdapter | None = None
        self._proxies: list[ProxyInterface] = []
        self._functions: dict[str, tuple[ProxyInterface, str]] | None = None
        self._temp_dir = self._get_writable_temp_dir(temp_dir)

    @classmethod
    def factory(
        cls,
        adapter: AbstractAdapter | None = None,
        temp_dir: str | None = None,
        logger: LoggerLike | None = None,
    ) -> CacheTool:
        """
        Create a facade with the bundled proxies registered.

        Registers MemoryCacheProxy, RuntimeProxy and BytecodeProxy, in that
        order, and sets the adapter when one is given.
        """
        from .proxy import BytecodeProxy, MemoryCacheProxy, RuntimeProxy

        cachetool = cls(temp_dir, logger)
        cachetool.add_proxy(MemoryCacheProxy())
        cachetool.add_proxy(RuntimeProxy())
        cachetool.add_proxy(BytecodeProxy())

        if adapter is not None:
            cachetool.set_adapter(adapter)

        return cachetool

    def set_adapter(self, adapter: AbstractAdapter) -> CacheTool:
        """
        Replace the adapter and wire the logger and temp dir into it.

        Proxies receive the adapter on the next function table build; an
        already built table keeps the previous wiring until it is reset.
        """
        self._logger.info("Setting adapter: %s", adapter.__class__.__name__)

        self._adapter = adapter
        self._adapter.set_logger(self._logger)
        self._adapter.set_temp_dir(self._temp_dir)

        return self

    def get_adapter(self) -> AbstractAdapter | None:
        return self._adapter

    def get_temp_dir(self) -> str:
        return self._temp_dir

    def add_proxy(self, proxy: ProxyInterface) -> CacheTool:
        """Register a proxy and drop the function table."""
        self._logger.info("Adding proxy: %s", proxy.__class__.__name__)

        self._proxies.append(proxy)

        # rebuilt on next lookup
        self._functions = None

        return self

    def get_proxies(self) -> tuple[ProxyInterface, ...]:
        return tuple(self._proxies)

    def set_logger(self, logger: LoggerLike) -> CacheTool:
        """Replace the logger and re-inject it into the current adapter."""
        self._logger = logger

        if self._adapter is not None:
            self._adapter.set_logger(logger)

        return self

    def get_logger(self) -> LoggerLike:
        return self._logger

    def reset_functions(self) -> None:
        """Drop the function table so the next lookup re-wires every proxy."""
        self._functions = None

    def get_functions(self) -> dict[str, ProxyInterface]:
        """Return a snapshot of function name -> providing proxy."""
        return {name: proxy for name, (proxy, _) in self._load_functions().items()}

    def call(self, name: str, *arguments: Any) -> Any:
        """
        Call a proxy function by name.

        Args:
            name: Function name
            *arguments: Positional arguments passed through unchanged

        Returns:
            Whatever the proxy function returns

        Raises:
            FunctionNotFoundError: If no registered proxy provides the function
        """
        token = set_call_id(generate_call_id())
        try:
            if self._logger.isEnabledFor(NOTICE):
                self._logger.log(NOTICE, "Executing: %s(%s)", name, _render_arguments(arguments))

            proxy, function = self._get_function(name)
            return getattr(proxy, function)(*arguments)
        finally:
            reset_call_id(token)

    def _get_function(self, name: str) -> tuple[ProxyInterface, str]:
        functions = self._load_functions()

        if name in functions:
            return functions[name]

        raise FunctionNotFoundError(name)

    def _load_functions(self) -> dict[str, tuple[ProxyInterface, str]]:
        if self._functions is not None:
            return self._functions

        functions: dict[str, tuple[ProxyInterface, str]] = {}
        for proxy in self._proxies:
            self._logger.info("Loading proxy: %s", proxy.__class__.__name__)

            # lazily set adapter
            proxy.set_adapter(self._adapter)

            for function in proxy.get_functions():
                self._logger.debug("Loading function: %s", function)
                functions[function] = (proxy, function)

        self._functions = functions
        return functions

    def _get_writable_temp_dir(self, temp_dir: str | None = None) -> str:
        if temp_dir is None:
            candidates = [*FAST_TEMP_DIRS, tempfile.gettempdir()]
            for candidate in candidates:
                if os.path.isdir(candidate) and os.access(candidate, os.W_OK):
                    temp_dir = candidate
                    break
            else:
                temp_dir = candidates[-1]

        path = Path(temp_dir)
        if not path.exists():
            try:
                _make_dirs(path, 0o700)
            except OSError as e:
                raise ConfigurationError(
                    f"Could not create temp directory {temp_dir}: {e}",
                    details={"temp_dir": temp_dir, "error": str(e)},
                ) from e

        if not path.is_dir() or not os.access(path, os.W_OK):
            raise ConfigurationError(
                f"Temp directory is not writable: {temp_dir}",
                details={"temp_dir": temp_dir},
            )

        return temp_dir

    def __repr__(self) -> str:
        """Return string representation."""
        adapter = self._adapter.__class__.__name__ if self._adapter is not None else None
        return f"{self.__class__.__name__}(adapter={adapter}, proxies={len(self._proxies)}, temp_dir={self._temp_dir!r})"


def _make_dirs(path: Path, mode: int) -> None:
    """Create path and every missing parent with the given mode."""
    missing = []
    while not path.exists():
        missing.append(path)
        path = path.parent

    for directory in reversed(missing):
        directory.mkdir(mode=mode)


def _render_arguments(arguments: tuple[Any, ...]) -> str:
    """Render call arguments as JSON, falling back to repr() per argument."""
    rendered = []
    for argument in arguments:
        try:
            rendered.append(json.dumps(argument, default=repr))
        except (TypeError, ValueError):
            # non-str dict keys and reference cycles are not covered by default=
            rendered.append(json.dumps(repr(argument)))
    return ", ".join(rendered)
