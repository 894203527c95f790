"""
CacheTool — Runtime Proxy

Interpreter introspection functions.
"""

from typing import Any

from ..code import Code
from .interface import AbstractProxy


class RuntimeProxy(AbstractProxy):
    """Reports on the interpreter the adapter runs code in."""

    def get_functions(self) -> list[str]:
        return [
            "python_version",
            "module_loaded",
            "module_available",
            "_eval",
        ]

    def python_version(self) -> str:
        """Return the interpreter version string (e.g. ``3.12.1``)."""
        code = Code()
        code.add_statement("import platform")
        code.add_statement("return platform.python_version()")

        return self._run(code)

    def module_loaded(self, name: str) -> bool:
        """Return True if the module is already imported in the runtime."""
        code = Code()
        code.add_statement("import sys")
        code.add_statement(f"return {Code.literal(name)} in sys.modules")

        return self._run(code)

    def module_available(self, name: str) -> bool:
        """Return True if the module can be imported in the runtime."""
        code = Code()
        code.add_statement("import importlib.util")
        code.add_statement(
            f"""
            try:
                return importlib.util.find_spec({Code.literal(name)}) is not None
            except (ImportError, ValueError):
                return False
            """
        )

        return self._run(code)

    def _eval(self, source: str) -> Any:
        """
        Run arbitrary statements in the runtime.

        The statements form a function body; use ``return`` to produce a result.
        """
        return self._run(Code.from_string(source))
