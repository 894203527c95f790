"""
CacheTool — Factory

Builds a ready-to-use CacheTool facade from configuration.

Examples:
    from cachetool.factory import create_cachetool

    # Uses env-configured adapter (local by default)
    cachetool = create_cachetool()

    # Or explicitly supply a CacheToolConfig (e.g., for tests)
    from cachetool.config import AdapterConfig, AdapterKind, CacheToolConfig
    cfg = CacheToolConfig(adapter=AdapterConfig(kind=AdapterKind.CLI), temp_dir="/tmp/cachetool")
    cachetool = create_cachetool(cfg)
"""

from __future__ import annotations

import logging

from .adapter import create_adapter
from .config import CacheToolConfig, get_config
from .proxy import RedisProxy
from .tool import CacheTool, LoggerLike

logger = logging.getLogger(__name__)


def create_cachetool(
    config: CacheToolConfig | None = None,
    facade_logger: LoggerLike | None = None,
) -> CacheTool:
    """
    Create a CacheTool facade from configuration.

    Registers the bundled proxies, adds a RedisProxy when a Redis URL is
    configured, and sets the configured adapter.

    Args:
        config: Configuration (uses global config if not provided)
        facade_logger: Logger for the facade and adapter (library logger when None)

    Returns:
        Configured CacheTool instance

    Raises:
        ConfigurationError: If the adapter or temp directory is invalid
    """
    if config is None:
        config = get_config()

    adapter = create_adapter(config.adapter)
    cachetool = CacheTool.factory(adapter, temp_dir=config.temp_dir, logger=facade_logger)

    if config.redis.url:
        cachetool.add_proxy(RedisProxy(config.redis.url, socket_timeout=config.redis.socket_timeout))

    logger.info(
        "CacheTool created with %s and %d proxies",
        adapter.__class__.__name__,
        len(cachetool.get_proxies()),
        extra={"adapter": adapter.__class__.__name__, "temp_dir": cachetool.get_temp_dir()},
    )

    return cachetool
