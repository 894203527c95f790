"""
Adapter Factory

Creates adapters from configuration.
"""

import logging

from ..config import AdapterConfig, AdapterKind
from ..errors import ConfigurationError
from .base import AbstractAdapter
from .cli import CliAdapter
from .local import LocalAdapter

logger = logging.getLogger(__name__)

# Registry of available adapters
_ADAPTERS: dict[str, type[AbstractAdapter]] = {
    AdapterKind.LOCAL.value: LocalAdapter,
    AdapterKind.CLI.value: CliAdapter,
}


def create_adapter(config: AdapterConfig) -> AbstractAdapter:
    """
    Create an adapter instance.

    Args:
        config: Adapter configuration

    Returns:
        Adapter instance (logger and temp dir are wired by the facade)

    Raises:
        ConfigurationError: If the adapter kind is not supported
    """
    kind = config.kind.value if isinstance(config.kind, AdapterKind) else str(config.kind).lower().strip()

    if kind not in _ADAPTERS:
        supported = ", ".join(_ADAPTERS.keys())
        raise ConfigurationError(
            f"Unsupported adapter: {kind}. Supported adapters: {supported}",
            details={"adapter": kind, "supported": list(_ADAPTERS.keys())},
        )

    if kind == AdapterKind.CLI.value:
        adapter: AbstractAdapter = CliAdapter(
            python_executable=config.python_executable,
            timeout=config.timeout,
        )
    else:
        adapter = _ADAPTERS[kind]()

    logger.info("Created %s adapter", kind, extra={"adapter": kind})
    return adapter


def get_supported_adapters() -> list[str]:
    """
    Get list of supported adapter kinds.

    Returns:
        List of adapter kinds
    """
    return list(_ADAPTERS.keys())
