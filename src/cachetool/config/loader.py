"""
CacheTool — Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance for the runtime.
"""

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import CacheToolConfig

logger = logging.getLogger(__name__)

_config_instance: CacheToolConfig | None = None


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> CacheToolConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in working directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated CacheToolConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    if env_file:
        env_path = Path(env_file)
    else:
        env_path = Path.cwd() / ".env"

    if env_path.exists():
        logger.info("Loading environment from %s", env_path)
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                "Failed to load .env file from %s: %s",
                env_path,
                e,
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    try:
        config_dict = {
            "log_level": os.getenv("CACHETOOL_LOG_LEVEL", "INFO").upper(),
            "log_format": os.getenv("CACHETOOL_LOG_FORMAT", "text").lower(),
            "temp_dir": os.getenv("CACHETOOL_TEMP_DIR") or None,
            "adapter": {
                "kind": os.getenv("CACHETOOL_ADAPTER", "local").lower(),
                "python_executable": os.getenv("CACHETOOL_PYTHON", sys.executable),
                "timeout": float(os.getenv("CACHETOOL_TIMEOUT", "30.0")),
            },
            "redis": {
                "url": os.getenv("CACHETOOL_REDIS_URL"),
                "socket_timeout": int(os.getenv("CACHETOOL_REDIS_SOCKET_TIMEOUT", "5")),
            },
        }
    except ValueError as e:
        logger.error("Invalid numeric configuration value: %s", e, extra={"error": str(e)})
        raise ConfigurationError(
            f"Invalid numeric configuration value: {e}",
            details={"error": str(e)},
        ) from e

    try:
        _config_instance = CacheToolConfig(**config_dict)  # type: ignore[arg-type]
        logger.info(
            "Configuration loaded successfully (adapter: %s)",
            _config_instance.adapter.kind,
            extra={"adapter": _config_instance.adapter.kind, "log_level": _config_instance.log_level},
        )
        return _config_instance
    except ValidationError as e:
        logger.error(
            "Configuration validation failed: %s",
            e,
            extra={"validation_errors": e.errors(), "config_dict_keys": list(config_dict.keys())},
            exc_info=True,
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your CACHETOOL_* environment variables.",
            details={"validation_errors": e.errors()},
        ) from e


def get_config() -> CacheToolConfig:
    """
    Get the current configuration instance.

    Loads the configuration on first access.

    Returns:
        Current CacheToolConfig instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> CacheToolConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded CacheToolConfig instance
    """
    return load_config(env_file=env_file, reload=True)


def reset_config() -> None:
    """Drop the cached configuration instance. Used by tests."""
    global _config_instance
    _config_instance = None
