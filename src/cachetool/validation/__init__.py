"""
CacheTool - Input Validation Module

Provides Pydantic-based validation for MCP tool inputs.
"""

from .decorators import validate_input
from .tool_schemas import (
    CallFunctionInput,
    CheckStatusInput,
    ListFunctionsInput,
)

__all__ = [
    # Decorator
    "validate_input",
    # Tool input schemas
    "CallFunctionInput",
    "CheckStatusInput",
    "ListFunctionsInput",
]
