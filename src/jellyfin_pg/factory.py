"""Provider factory.

Picks the provider implementation for a host configuration:

1. The configured database type must name the PostgreSQL provider.
2. If ``pg_dump`` and ``pg_restore`` are on PATH, the full provider is
   returned; otherwise the backup-less variant.
"""

import logging
import shutil
from typing import Any

from jellyfin_pg.config.models import ApplicationPaths, DatabaseConfigurationOptions
from jellyfin_pg.errors import ProviderNotFoundError
from jellyfin_pg.providers.no_backup import NoBackupPostgresDatabaseProvider
from jellyfin_pg.providers.postgres import PROVIDER_KEY, PostgresDatabaseProvider

logger = logging.getLogger(__name__)

BACKUP_TOOLS = ("pg_dump", "pg_restore")


def _requested_key(configuration: DatabaseConfigurationOptions) -> str:
    custom = configuration.custom_provider_options
    if custom is not None and custom.plugin_name:
        return custom.plugin_name
    return configuration.database_type


def backup_tools_available() -> bool:
    """True if every backup tool resolves on PATH."""
    return all(shutil.which(tool) is not None for tool in BACKUP_TOOLS)


def get_provider(
    configuration: DatabaseConfigurationOptions,
    app_paths: ApplicationPaths,
    **engine_kwargs: Any,
) -> PostgresDatabaseProvider:
    """Build and initialise the provider for ``configuration``.

    Args:
        configuration: Database section of the host configuration.
        app_paths: Host directories.
        **engine_kwargs: Forwarded to the engine factory.

    Returns:
        An initialised ``PostgresDatabaseProvider`` (or
        ``NoBackupPostgresDatabaseProvider`` when the client tools are
        missing).

    Raises:
        ProviderNotFoundError: If the configuration names another provider.

    Example:
        >>> provider = get_provider(DatabaseConfigurationOptions(), paths)
        >>> key = await provider.create_backup()
    """
    requested = _requested_key(configuration)
    if requested.casefold() != PROVIDER_KEY.casefold():
        raise ProviderNotFoundError(
            f"No provider registered for '{requested}'. "
            f"Available: {PROVIDER_KEY}"
        )

    if backup_tools_available():
        provider_cls = PostgresDatabaseProvider
    else:
        logger.warning(
            "%s not found on PATH, backups are disabled", " / ".join(BACKUP_TOOLS)
        )
        provider_cls = NoBackupPostgresDatabaseProvider

    return provider_cls.from_configuration(app_paths, configuration, **engine_kwargs)
