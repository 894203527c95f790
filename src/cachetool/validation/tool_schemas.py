"""
CacheTool - Tool Input Validation Schemas

Pydantic models for validating MCP tool inputs.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class ListFunctionsInput(BaseModel):
    """Input validation for list_functions tool (no parameters)."""

    pass


class CheckStatusInput(BaseModel):
    """Input validation for check_status tool."""

    include_functions: bool = Field(
        default=False,
        description="Include the function -> proxy table in the response",
    )


class CallFunctionInput(BaseModel):
    """Input validation for call_function tool."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Name of the proxy function to call",
    )
    arguments: list[Any] = Field(
        default_factory=list,
        max_length=100,
        description="Positional arguments passed to the function",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure the function name is a Python identifier."""
        v = v.strip()
        if not v.isidentifier():
            raise ValueError("Function name must be a valid identifier")
        return v
