"""
CacheTool — Code

Buffer of Python statements executed by an adapter in the target runtime.

The statements form the body of a function. The generated program calls it,
records any raised exception and any emitted warnings, and prints a single
JSON document to stdout:

    {"result": <value>, "errors": [...], "warnings": [...]}

Errors and warnings are reported as {"type": <class name>, "message": <text>}.
SystemExit raised by the statements is reported as an error, so sys.exit()
never ends the hosting process.
Values that JSON cannot represent are rendered with repr(); a result JSON
cannot encode at all (cycles, non-string keys) is rendered as one repr().

Example:
    code = Code.from_string("import sys")
    code.add_statement("return sys.version")
    result = adapter.run(code)
"""

from __future__ import annotations

import math
import textwrap
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .errors import ValidationError

_BODY_MARKER = "__CACHETOOL_BODY__"

_PROGRAM_TEMPLATE = """\
import json as _cachetool_json
import warnings as _cachetool_warnings


def _cachetool_main():
__CACHETOOL_BODY__


_cachetool_errors = []
with _cachetool_warnings.catch_warnings(record=True) as _cachetool_caught:
    _cachetool_warnings.simplefilter("always")
    try:
        _cachetool_result = _cachetool_main()
    except (Exception, SystemExit) as _cachetool_exc:
        _cachetool_result = None
        _cachetool_errors.append({"type": type(_cachetool_exc).__name__, "message": str(_cachetool_exc)})

_cachetool_reported = [{"type": w.category.__name__, "message": str(w.message)} for w in _cachetool_caught]
try:
    _cachetool_output = _cachetool_json.dumps(_cachetool_result, default=repr)
except (TypeError, ValueError):
    _cachetool_output = _cachetool_json.dumps(repr(_cachetool_result))
print(
    '{"result": '
    + _cachetool_output
    + ', "errors": '
    + _cachetool_json.dumps(_cachetool_errors, default=repr)
    + ', "warnings": '
    + _cachetool_json.dumps(_cachetool_reported, default=repr)
    + "}"
)
"""


class Code:
    """Ordered list of Python statements forming a function body."""

    def __init__(self) -> None:
        self._statements: list[str] = []

    @classmethod
    def from_string(cls, statement: str) -> Code:
        """Create a Code buffer holding a single statement."""
        code = cls()
        code.add_statement(statement)
        return code

    def add_statement(self, statement: str) -> Code:
        """Append a statement (may span several lines)."""
        self._statements.append(textwrap.dedent(statement).strip("\n"))
        return self

    def add_statements(self, statements: Iterable[str]) -> Code:
        """Append several statements in order."""
        for statement in statements:
            self.add_statement(statement)
        return self

    def get_statements(self) -> list[str]:
        """Return a copy of the buffered statements."""
        return list(self._statements)

    def get_body(self) -> str:
        """Return the statements joined as an unindented function body."""
        return "\n".join(self._statements)

    def get_code(self) -> str:
        """Return the complete program, ready to execute."""
        body = self.get_body() or "pass"
        return _PROGRAM_TEMPLATE.replace(_BODY_MARKER, textwrap.indent(body, "    ", lambda line: True))

    def write_to(self, path: str | Path) -> Path:
        """Write the complete program to a file."""
        target = Path(path)
        target.write_text(self.get_code(), encoding="utf-8")
        return target

    @staticmethod
    def literal(value: Any) -> str:
        """
        Render a value as a Python literal for embedding in a statement.

        Args:
            value: None, bool, int, float, str, bytes or list/tuple/dict of those

        Returns:
            Source text that evaluates to an equal value

        Raises:
            ValidationError: If the value cannot be expressed as a literal
        """
        _check_literal(value)
        return repr(value)

    def __str__(self) -> str:
        return self.get_code()

    def __repr__(self) -> str:
        return f"Code(statements={len(self._statements)})"


def _check_literal(value: Any) -> None:
    if value is None or isinstance(value, (bool, int, str, bytes)):
        return
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError("Non-finite floats cannot be embedded in code", {"value": repr(value)})
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _check_literal(item)
        return
    if isinstance(value, dict):
        for key, item in value.items():
            _check_literal(key)
            _check_literal(item)
        return
    raise ValidationError(
        f"Value of type {type(value).__name__} cannot be embedded in code",
        {"type": type(value).__name__},
    )
