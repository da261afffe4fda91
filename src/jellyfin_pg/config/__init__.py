"""Configuration: option lookup, TOML loading, and config models.

Usage:
    >>> from jellyfin_pg.config import load_provider_config, build_connection_info
"""

from jellyfin_pg.config.loader import load_provider_config
from jellyfin_pg.config.models import (
    ApplicationPaths,
    ConnectionInfo,
    CustomDatabaseOption,
    CustomDatabaseOptions,
    DatabaseConfigurationOptions,
    ProviderConfig,
)
from jellyfin_pg.config.options import build_connection_info, get_option

__all__ = [
    "load_provider_config",
    "build_connection_info",
    "get_option",
    "ApplicationPaths",
    "ConnectionInfo",
    "CustomDatabaseOption",
    "CustomDatabaseOptions",
    "DatabaseConfigurationOptions",
    "ProviderConfig",
]
