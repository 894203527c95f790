"""
CacheTool MCP Tools

Exposes the CacheTool facade as MCP tools.

Provides 3 tools:
- list_functions: Function names and the proxy serving each
- call_function: Dispatch a proxy function by name
- check_status: Adapter, temp dir and proxy overview

Every tool returns a dictionary with a ``success`` flag; failures are
reported through make_error_response() instead of raised.
"""

import asyncio
import logging
from typing import Any

from .errors import CacheToolError, extract_error_code, make_error_response
from .tool import CacheTool
from .validation import CallFunctionInput, CheckStatusInput, ListFunctionsInput, validate_input

logger = logging.getLogger(__name__)


class CacheToolTools:
    """MCP tool implementations bound to one CacheTool facade."""

    def __init__(self, cachetool: CacheTool) -> None:
        self.cachetool = cachetool

    @validate_input(ListFunctionsInput)
    async def list_functions(self) -> dict[str, Any]:
        """Return every function name mapped to the proxy class providing it."""
        functions = await asyncio.to_thread(self.cachetool.get_functions)

        return {
            "success": True,
            "functions": {name: proxy.__class__.__name__ for name, proxy in sorted(functions.items())},
        }

    @validate_input(CallFunctionInput)
    async def call_function(self, name: str, arguments: list[Any]) -> dict[str, Any]:
        """Call a proxy function and wrap its result."""
        try:
            # adapters block (the cli adapter waits on a subprocess)
            result = await asyncio.to_thread(self.cachetool.call, name, *arguments)
        except CacheToolError as e:
            logger.warning(
                "Function %s failed: %s",
                name,
                e.message,
                extra={"function": name, "error_type": type(e).__name__},
            )
            return make_error_response(extract_error_code(e), e.message, {"function": name, **e.details})
        except Exception as e:
            logger.error(
                "Unexpected error calling %s: %s",
                name,
                e,
                extra={"function": name, "error": str(e)},
                exc_info=True,
            )
            return make_error_response(
                extract_error_code(e),
                f"{type(e).__name__}: {e}",
                {"function": name},
            )

        return {"success": True, "function": name, "result": result}

    @validate_input(CheckStatusInput)
    async def check_status(self, include_functions: bool = False) -> dict[str, Any]:
        """Describe the facade's wiring."""
        adapter = self.cachetool.get_adapter()
        functions = await asyncio.to_thread(self.cachetool.get_functions)

        status: dict[str, Any] = {
            "success": True,
            "status": "healthy" if adapter is not None else "no_adapter",
            "adapter": adapter.__class__.__name__ if adapter is not None else None,
            "temp_dir": self.cachetool.get_temp_dir(),
            "proxies": [proxy.__class__.__name__ for proxy in self.cachetool.get_proxies()],
            "num_functions": len(functions),
        }

        if include_functions:
            status["functions"] = {name: proxy.__class__.__name__ for name, proxy in sorted(functions.items())}

        return status
