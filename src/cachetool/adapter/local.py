"""
CacheTool — Local Adapter

Runs code inside the current interpreter.

Proxy functions therefore observe and act on the caches of the process that
hosts CacheTool itself, which is what an embedding application usually wants.
"""

import contextlib
import io

from ..code import Code
from ..errors import CodeExecutionError
from .base import AbstractAdapter


class LocalAdapter(AbstractAdapter):
    """In-process adapter with captured stdout."""

    def _do_run(self, code: Code) -> str:
        try:
            program = compile(code.get_code(), "<cachetool>", "exec")
        except SyntaxError as e:
            self.logger.error("SyntaxError: %s", e)
            raise CodeExecutionError([{"type": type(e).__name__, "message": str(e)}]) from e

        buffer = io.StringIO()
        namespace = {"__name__": "__cachetool__"}
        with contextlib.redirect_stdout(buffer):
            try:
                exec(program, namespace)
            except SystemExit as e:
                raise CodeExecutionError([{"type": "SystemExit", "message": str(e)}]) from e
        return buffer.getvalue()
