"""
CacheTool - Validation Decorators

Provides decorators for applying Pydantic validation to MCP tools.

- validate_input decorator for automatic input validation
- Structured error responses with ErrorCode
"""

import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ValidationError

from ..errors import ErrorCode, make_error_response

logger = logging.getLogger(__name__)


def _invalid_input_response(func: Callable[..., Any], error: ValidationError, kwargs: dict[str, Any]) -> dict[str, Any]:
    validation_errors = []
    for item in error.errors():
        field_path = " -> ".join(str(loc) for loc in item["loc"])
        validation_errors.append(
            {
                "field": field_path,
                "message": item["msg"],
                "type": item["type"],
            }
        )

    logger.warning(
        "Input validation failed for %s",
        func.__name__,
        extra={
            "function": func.__name__,
            "validation_errors": validation_errors,
            "input_kwargs": kwargs,
        },
    )

    return make_error_response(
        error_code=ErrorCode.INVALID_INPUT,
        message="Input validation failed",
        context={
            "validation_errors": validation_errors,
            "function": func.__name__,
        },
    )


def validate_input(schema: type[BaseModel]) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator to validate tool inputs using Pydantic schema.

    Args:
        schema: Pydantic model class for input validation

    Returns:
        Decorated function with automatic validation

    Example:
        >>> @validate_input(CallFunctionInput)
        ... async def call_function(name: str, arguments: list[Any]):
        ...     # Function receives validated inputs
        ...     pass

    Error Response:
        {
            "success": False,
            "error_code": "INVALID_INPUT",
            "message": "Input validation failed",
            "details": {
                "validation_errors": [
                    {
                        "field": "name",
                        "message": "String should have at least 1 character",
                        "type": "string_too_short"
                    }
                ]
            }
        }
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                validated = schema(**kwargs)
            except ValidationError as e:
                return _invalid_input_response(func, e, kwargs)

            return await func(*args, **validated.model_dump(exclude_unset=False))

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                validated = schema(**kwargs)
            except ValidationError as e:
                return _invalid_input_response(func, e, kwargs)

            return func(*args, **validated.model_dump(exclude_unset=False))

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
