"""jellyfin-pg: PostgreSQL database provider for Jellyfin.

Resolves connection settings from the host's generic option bag, exposes
the provider lifecycle hooks, and manages backups through ``pg_dump`` and
``pg_restore``.

Usage:
    from jellyfin_pg import PostgresDatabaseProvider, get_provider
    from jellyfin_pg import ApplicationPaths, DatabaseConfigurationOptions
    from jellyfin_pg import ExternalToolError, UnsupportedOperationError
"""

__version__ = "0.1.0"

# Config
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

# Errors
from jellyfin_pg.errors import (
    ExternalToolError,
    JellyfinPgError,
    ProviderNotFoundError,
    ProviderNotInitialisedError,
    UnsupportedOperationError,
)

# Providers
from jellyfin_pg.providers.base import DatabaseProvider
from jellyfin_pg.providers.design_time import create_design_time_engine
from jellyfin_pg.providers.no_backup import NoBackupPostgresDatabaseProvider
from jellyfin_pg.providers.postgres import PROVIDER_KEY, PostgresDatabaseProvider

# Factory
from jellyfin_pg.factory import get_provider

# Backups
from jellyfin_pg.backup.files import list_backups
from jellyfin_pg.purge import purge_tables

__all__ = [
    # Config
    "load_provider_config",
    "build_connection_info",
    "get_option",
    "ApplicationPaths",
    "ConnectionInfo",
    "CustomDatabaseOption",
    "CustomDatabaseOptions",
    "DatabaseConfigurationOptions",
    "ProviderConfig",
    # Errors
    "JellyfinPgError",
    "ExternalToolError",
    "UnsupportedOperationError",
    "ProviderNotInitialisedError",
    "ProviderNotFoundError",
    # Providers
    "DatabaseProvider",
    "PostgresDatabaseProvider",
    "NoBackupPostgresDatabaseProvider",
    "create_design_time_engine",
    "PROVIDER_KEY",
    "get_provider",
    # Backups
    "list_backups",
    "purge_tables",
]
