"""
CacheTool — CLI Adapter

Runs code in a separate interpreter process.

The program is written to a scratch file inside the temp directory, executed
with the configured interpreter, and removed afterwards. The interpreter may
be a different installation (e.g. a virtualenv) than the one hosting CacheTool.
"""

import subprocess
import sys

from ..code import Code
from ..errors import AdapterError
from .base import AbstractAdapter


class CliAdapter(AbstractAdapter):
    """Subprocess adapter."""

    def __init__(self, python_executable: str | None = None, timeout: float = 30.0) -> None:
        """
        Initialize the CLI adapter.

        Args:
            python_executable: Interpreter to run (default: the current one)
            timeout: Seconds to wait for the process before failing
        """
        super().__init__()
        self.python_executable = python_executable or sys.executable
        self.timeout = timeout

    def _do_run(self, code: Code) -> str:
        file = self._create_temporary_file()
        try:
            code.write_to(file)
            cmd = [self.python_executable, str(file)]
            self.logger.debug("Running: %s", " ".join(cmd))

            try:
                process = subprocess.run(
                    cmd,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                    check=False,
                )
            except subprocess.TimeoutExpired as e:
                raise AdapterError(
                    f"Interpreter timed out after {self.timeout}s",
                    {"command": cmd, "timeout": self.timeout},
                ) from e
            except OSError as e:
                raise AdapterError(
                    f"Failed to start interpreter {self.python_executable}: {e}",
                    {"command": cmd, "error": str(e)},
                ) from e

            if process.returncode != 0:
                raise AdapterError(
                    f"Interpreter exited with status {process.returncode}: {process.stderr.strip()}",
                    {"command": cmd, "returncode": process.returncode, "stderr": process.stderr},
                )

            return process.stdout
        finally:
            file.unlink(missing_ok=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"{self.__class__.__name__}(python_executable={self.python_executable!r}, timeout={self.timeout})"
