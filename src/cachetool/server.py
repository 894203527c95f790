"""
CacheTool — Server

FastMCP server using stdio transport (Model Context Protocol).

Exposes the proxy functions of a configured CacheTool facade to MCP clients.
Configuration comes from CACHETOOL_* environment variables (see config.loader).
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP

from .config import LogFormat, load_config
from .factory import create_cachetool
from .observability import configure_logging
from .tools import CacheToolTools

logger = logging.getLogger(__name__)

_tools: CacheToolTools | None = None


def initialize_server() -> CacheToolTools:
    """Create the facade and tool bindings (idempotent)."""
    global _tools

    if _tools is not None:
        return _tools

    logger.info("Initializing CacheTool server...")

    try:
        config = load_config()
        cachetool = create_cachetool(config)
    except Exception as e:
        logger.error("Failed to initialize server: %s", e, exc_info=True)
        raise

    _tools = CacheToolTools(cachetool)
    logger.info(
        "CacheTool server initialized: adapter=%s, temp_dir=%s",
        config.adapter.kind,
        cachetool.get_temp_dir(),
    )
    return _tools


def cleanup_server() -> None:
    """Drop the facade on shutdown."""
    global _tools

    if _tools is None:
        return

    _tools = None
    logger.info("CacheTool server cleanup complete")


def get_tools() -> CacheToolTools:
    """Return the tool bindings, initializing the server on first use."""
    if _tools is None:
        return initialize_server()
    return _tools


@asynccontextmanager
async def server_lifespan(server: Any) -> AsyncIterator[None]:
    """Server lifespan manager (startup/shutdown)."""
    initialize_server()
    try:
        yield
    finally:
        cleanup_server()


mcp = FastMCP("CacheTool", lifespan=server_lifespan)


@mcp.tool()
async def list_functions() -> dict[str, Any]:
    """
    List the functions provided by the registered proxies.

    Returns:
        Mapping of function name to proxy class
    """
    return await get_tools().list_functions()


@mcp.tool()
async def call_function(name: str, arguments: list[Any] | None = None) -> dict[str, Any]:
    """
    Call a proxy function by name.

    Args:
        name: Function name (see list_functions)
        arguments: Positional arguments for the function

    Returns:
        Function result or a structured error response
    """
    return await get_tools().call_function(name=name, arguments=arguments or [])


@mcp.tool()
async def check_status(include_functions: bool = False) -> dict[str, Any]:
    """
    Check the adapter, temp directory and registered proxies.

    Args:
        include_functions: Include the function table

    Returns:
        Status information
    """
    return await get_tools().check_status(include_functions=include_functions)


def main() -> None:
    """CLI entry point for the cachetool-mcp command."""
    config = load_config()
    configure_logging(config.log_level, json_format=config.log_format == LogFormat.JSON.value)
    mcp.run()


if __name__ == "__main__":
    main()
