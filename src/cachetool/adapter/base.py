"""
CacheTool — Base Adapter

Defines the abstract adapter all backends implement.

An adapter is the connection to a cache/runtime backend. The facade wires a
logger and a writable temp directory into it; proxies hand it Code to run.
Subclasses only implement _do_run(), which executes the program and returns
its raw stdout. Decoding, error reporting and logging live here.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any
from uuid import uuid4

from ..code import Code
from ..errors import AdapterError, CodeExecutionError, SerializationError
from ..observability import get_default_logger


class AbstractAdapter(ABC):
    """
    Abstract base class for adapters.

    All adapters must implement this interface to ensure consistent
    behavior across execution channels (in-process, subprocess, ...).
    """

    def __init__(self) -> None:
        self.logger: logging.Logger | logging.LoggerAdapter = get_default_logger()
        self.temp_dir: str | None = None

    @abstractmethod
    def _do_run(self, code: Code) -> str:
        """
        Execute the program built from code.

        Args:
            code: Code to execute

        Returns:
            Raw output printed by the program
        """
        pass

    def run(self, code: Code) -> Any:
        """
        Run code in the target runtime and return its result.

        Args:
            code: Code to execute

        Returns:
            Decoded result value

        Raises:
            SerializationError: If the output is not a result document
            CodeExecutionError: If the executed code raised
        """
        self.logger.debug("Executing code: %s", code.get_body())

        data = self._do_run(code)
        result = self._decode(data)

        errors = result.get("errors") or []
        warnings = result.get("warnings") or []
        self.logger.debug("Return errors: %s", json.dumps(errors))
        self.logger.debug("Return result: %s", json.dumps(result.get("result"), default=repr))

        for warning in warnings:
            self.logger.warning("%s: %s", warning.get("type"), warning.get("message"))

        if errors:
            for error in errors:
                self.logger.error("%s: %s", error.get("type"), error.get("message"))
            raise CodeExecutionError(errors)

        return result.get("result")

    def _decode(self, data: str) -> dict[str, Any]:
        # The result document is the last line; anything printed before it is
        # output produced by the executed statements themselves.
        lines = data.strip().splitlines()
        if not lines:
            self.logger.debug("Return serialized: %r", data)
            raise SerializationError(data, {"reason": "empty output"})

        try:
            result = json.loads(lines[-1])
        except ValueError as e:
            self.logger.debug("Return serialized: %r", data)
            raise SerializationError(data, {"error": str(e)}) from e

        if not isinstance(result, dict) or "result" not in result:
            self.logger.debug("Return serialized: %r", data)
            raise SerializationError(data, {"reason": "missing result document"})

        return result

    def set_logger(self, logger: logging.Logger | logging.LoggerAdapter) -> "AbstractAdapter":
        """Set the logger used for execution diagnostics."""
        self.logger = logger
        return self

    def set_temp_dir(self, temp_dir: str) -> "AbstractAdapter":
        """Set the writable directory used for scratch files."""
        self.temp_dir = temp_dir
        return self

    def get_temp_dir(self) -> str | None:
        """Return the scratch directory, if one was set."""
        return self.temp_dir

    def _create_temporary_file(self, suffix: str = ".py") -> Path:
        """
        Create an empty owner-only file in the temp directory.

        Raises:
            AdapterError: If no temp directory was set
        """
        if not self.temp_dir:
            raise AdapterError(
                f"No temp directory set for adapter {self.__class__.__name__}",
                {"adapter": self.__class__.__name__},
            )

        path = Path(self.temp_dir) / f"cachetool-{uuid4().hex}{suffix}"
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        os.close(fd)
        return path

    def __repr__(self) -> str:
        """Return string representation."""
        return f"{self.__class__.__name__}(temp_dir={self.temp_dir!r})"
