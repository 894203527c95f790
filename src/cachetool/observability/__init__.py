"""
CacheTool — Observability Module

Logging helpers shared by the facade, adapters and the MCP server.

Usage:
    from cachetool.observability import NOTICE, configure_logging

    logger = configure_logging("DEBUG", json_format=True)
    logger.log(NOTICE, "Executing: %s", "python_version()")
"""

from .monitoring import (
    LOGGER_NAME,
    NOTICE,
    JSONFormatter,
    configure_logging,
    generate_call_id,
    get_call_id,
    get_default_logger,
    reset_call_id,
    set_call_id,
)

__all__ = [
    "LOGGER_NAME",
    "NOTICE",
    "JSONFormatter",
    "configure_logging",
    "generate_call_id",
    "get_call_id",
    "get_default_logger",
    "reset_call_id",
    "set_call_id",
]
