"""
CacheTool — Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import json
import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from cachetool.adapter.base import AbstractAdapter
from cachetool.code import Code
from cachetool.proxy.interface import ProxyInterface
from cachetool.tool import CacheTool

# Set test environment
os.environ["CACHETOOL_LOG_LEVEL"] = "DEBUG"


class RecordingAdapter(AbstractAdapter):
    """Adapter that records the code it receives and returns a canned document."""

    def __init__(self, result: Any = None, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__()
        self.result = result
        self.errors = errors or []
        self.warnings: list[dict[str, Any]] = []
        self.codes: list[Code] = []
        self.loggers: list[Any] = []
        self.temp_dirs: list[str] = []

    def _do_run(self, code: Code) -> str:
        self.codes.append(code)
        return json.dumps({"result": self.result, "errors": self.errors, "warnings": self.warnings})

    def set_logger(self, logger: Any) -> "RecordingAdapter":
        self.loggers.append(logger)
        return super().set_logger(logger)

    def set_temp_dir(self, temp_dir: str) -> "RecordingAdapter":
        self.temp_dirs.append(temp_dir)
        return super().set_temp_dir(temp_dir)

    @property
    def last_body(self) -> str:
        return self.codes[-1].get_body()


class StubProxy(ProxyInterface):
    """Proxy whose functions record their calls and echo their arguments."""

    def __init__(self, label: str, functions: list[str]) -> None:
        self.label = label
        self.functions = list(functions)
        self.adapter_calls: list[Any] = []
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.get_functions_calls = 0

    def get_functions(self) -> list[str]:
        self.get_functions_calls += 1
        return list(self.functions)

    def set_adapter(self, adapter: Any) -> None:
        self.adapter_calls.append(adapter)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("__") or name not in self.__dict__.get("functions", []):
            raise AttributeError(name)

        def function(*args: Any) -> Any:
            self.calls.append((name, args))
            return (self.label, name, args)

        return function


@pytest.fixture
def make_proxy() -> Callable[..., StubProxy]:
    """Factory for StubProxy instances."""
    return StubProxy


@pytest.fixture
def recording_adapter() -> RecordingAdapter:
    """Adapter returning None with no errors."""
    return RecordingAdapter()


@pytest.fixture
def make_recording_adapter() -> Callable[..., RecordingAdapter]:
    """Factory for RecordingAdapter instances."""
    return RecordingAdapter


@pytest.fixture
def temp_dir(tmp_path: Path) -> str:
    """Existing writable working directory."""
    work = tmp_path / "work"
    work.mkdir()
    return str(work)


@pytest.fixture
def cachetool(temp_dir: str) -> CacheTool:
    """Facade with an explicit temp dir and no proxies."""
    return CacheTool(temp_dir=temp_dir)


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
def cachetool_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture everything logged under the cachetool logger."""
    caplog.set_level(logging.DEBUG, logger="cachetool")
    return caplog


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None, None, None]:
    """Reset config and server singletons after each test to prevent state leakage."""
    yield
    from cachetool import server
    from cachetool.config import reset_config

    reset_config()
    server.cleanup_server()
