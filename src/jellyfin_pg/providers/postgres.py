"""PostgreSQL database provider.

Provides ``PostgresDatabaseProvider``, an implementation of the
``DatabaseProvider`` protocol backed by SQLAlchemy's async engine with the
``psycopg`` driver, and ``pg_dump`` / ``pg_restore`` for backups.

Usage:
    from pathlib import Path
    from jellyfin_pg.config.models import ApplicationPaths, DatabaseConfigurationOptions
    from jellyfin_pg.providers.postgres import PostgresDatabaseProvider

    provider = PostgresDatabaseProvider(ApplicationPaths(data_path=Path("/data")))
    engine = provider.initialise(DatabaseConfigurationOptions())

    key = await provider.create_backup()
    await provider.restore_backup(key)
    await provider.close()
"""

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncEngine,
    create_async_engine,
)

from jellyfin_pg.backup.files import backup_file_path, backups_dir, new_backup_key
from jellyfin_pg.backup.process import run_tool
from jellyfin_pg.config.models import (
    ApplicationPaths,
    ConnectionInfo,
    DatabaseConfigurationOptions,
)
from jellyfin_pg.config.options import build_connection_info
from jellyfin_pg.errors import ProviderNotInitialisedError
from jellyfin_pg.purge import purge_tables

logger = logging.getLogger(__name__)

PROVIDER_KEY = "Jellyfin-PostgreSQL"


def create_async_engine_pooled(database_url: URL | str, **kwargs: Any) -> AsyncEngine:
    """Create an async SQLAlchemy engine with connection pooling.

    Default pool settings:

    - ``pool_size=5``: Reasonable default for typical workloads.
    - ``max_overflow=10``: Allow burst connections.
    - ``pool_pre_ping=True``: Validate connections before checkout.
    - ``pool_recycle=300``: Recycle connections every 5 minutes.

    Args:
        database_url: PostgreSQL URL with ``postgresql+psycopg://`` scheme.
        **kwargs: Additional keyword arguments forwarded to
            ``create_async_engine``.

    Returns:
        Configured ``AsyncEngine``.
    """
    url = make_url(database_url)
    if "connect_timeout" not in url.query:
        url = url.update_query_dict({"connect_timeout": "5"})

    defaults: dict[str, Any] = {
        "pool_size": 5,
        "max_overflow": 10,
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "echo": False,
    }
    # Caller kwargs override defaults
    merged = {**defaults, **kwargs}

    return create_async_engine(url, **merged)


class PostgresDatabaseProvider:
    """PostgreSQL implementation of the ``DatabaseProvider`` protocol.

    Connection settings come either from ``initialise()`` (the host's
    generic option bag) or directly from the constructor.  Backups are
    written under ``{data_path}/backups`` in ``pg_dump``'s custom archive
    format.

    Args:
        app_paths: Host directories; backups go under ``app_paths.data_path``.
        connection_info: Pre-resolved connection settings.  When omitted,
            ``initialise()`` must run before any backup operation.
        dump_tool: Executable used for backups.
        restore_tool: Executable used for restores.
    """

    provider_key = PROVIDER_KEY

    def __init__(
        self,
        app_paths: ApplicationPaths,
        connection_info: ConnectionInfo | None = None,
        dump_tool: str = "pg_dump",
        restore_tool: str = "pg_restore",
    ) -> None:
        self._app_paths = app_paths
        self._connection_info = connection_info
        self.dump_tool = dump_tool
        self.restore_tool = restore_tool
        self.engine: AsyncEngine | None = None

    @classmethod
    def from_configuration(
        cls,
        app_paths: ApplicationPaths,
        configuration: DatabaseConfigurationOptions,
        **engine_kwargs: Any,
    ) -> "PostgresDatabaseProvider":
        """Build a provider and initialise it in one step."""
        provider = cls(app_paths)
        provider.initialise(configuration, **engine_kwargs)
        return provider

    @property
    def connection_info(self) -> ConnectionInfo:
        """Resolved connection settings.

        Raises:
            ProviderNotInitialisedError: If neither the constructor nor
                ``initialise()`` supplied them.
        """
        if self._connection_info is None:
            raise ProviderNotInitialisedError(
                f"{type(self).__name__} has no connection info; "
                "call initialise() or pass connection_info."
            )
        return self._connection_info

    @property
    def app_paths(self) -> ApplicationPaths:
        return self._app_paths

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def initialise(
        self,
        configuration: DatabaseConfigurationOptions,
        **engine_kwargs: Any,
    ) -> AsyncEngine:
        """Resolve connection settings from the option bag and create the engine.

        Missing keys fall back to ``localhost``, ``5432``, ``jellyfin``,
        ``jellyfin``, ``jellyfin``.  The resulting connection string is
        logged at INFO with the password masked.

        Args:
            configuration: Database section of the host configuration.
            **engine_kwargs: Forwarded to ``create_async_engine_pooled``.

        Returns:
            The new ``AsyncEngine``, also stored on ``self.engine``.

        Raises:
            ValueError: If the ``port`` option is not an integer.
        """
        custom = configuration.custom_provider_options
        info = build_connection_info(custom.options if custom is not None else None)

        logger.info("PostgreSQL connection string: %s", info.describe())

        self._connection_info = info
        self.engine = create_async_engine_pooled(info.url(), **engine_kwargs)
        return self.engine

    def on_model_creating(self, model_builder: Any) -> None:
        """No PostgreSQL-specific model configuration is needed."""

    def configure_conventions(self, builder: Any) -> None:
        """No PostgreSQL-specific conventions are needed."""

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    async def run_scheduled_optimisation(self) -> None:
        # autovacuum covers routine maintenance
        return None

    async def run_shutdown_task(self) -> None:
        return None

    async def close(self) -> None:
        """Dispose of the engine's connection pool."""
        if self.engine is not None:
            await self.engine.dispose()

    # ------------------------------------------------------------------
    # Backups
    # ------------------------------------------------------------------

    async def create_backup(self) -> str:
        """Dump the database with ``pg_dump`` and return the backup key.

        The dump uses the custom archive format with large objects
        included.  Keys have one-second resolution; a second backup in the
        same second reuses the key and overwrites the first file.

        Returns:
            Backup key (UTC ``%Y%m%d%H%M%S``).

        Raises:
            ExternalToolError: If ``pg_dump`` exits non-zero.
            ProviderNotInitialisedError: If no connection info is set.
        """
        info = self.connection_info
        key = new_backup_key()
        backups_dir(self._app_paths.data_path).mkdir(parents=True, exist_ok=True)
        backup_file = backup_file_path(self._app_paths.data_path, key)

        logger.info("Creating PostgreSQL backup at %s", backup_file)

        await run_tool(
            self.dump_tool,
            [
                "-h", info.host,
                "-p", str(info.port),
                "-U", info.username,
                "-F", "c",
                "-b",
                "-v",
                "-f", str(backup_file),
                info.database,
            ],
            password=info.password,
        )
        return key

    async def restore_backup(self, key: str) -> None:
        """Restore backup ``key`` with ``pg_restore``, dropping objects first.

        Logs at CRITICAL and returns if no file exists for ``key``.

        Raises:
            ExternalToolError: If ``pg_restore`` exits non-zero.
            ProviderNotInitialisedError: If no connection info is set.
        """
        backup_file = backup_file_path(self._app_paths.data_path, key)
        if not backup_file.exists():
            logger.critical("Tried to restore a backup that does not exist: %s", key)
            return

        info = self.connection_info
        logger.info("Restoring PostgreSQL backup from %s", backup_file)

        await run_tool(
            self.restore_tool,
            [
                "-h", info.host,
                "-p", str(info.port),
                "-U", info.username,
                "-d", info.database,
                "-c",
                "-v",
                str(backup_file),
            ],
            password=info.password,
        )

    async def delete_backup(self, key: str) -> None:
        """Delete the file for backup ``key``.

        Logs at CRITICAL and returns if no file exists for ``key``.

        Raises:
            OSError: If the file cannot be removed.
        """
        backup_file = backup_file_path(self._app_paths.data_path, key)
        if not backup_file.exists():
            logger.critical("Tried to delete a backup that does not exist: %s", key)
            return

        backup_file.unlink()
        logger.info("Deleted PostgreSQL backup %s", key)

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------

    async def purge_tables(
        self,
        db: AsyncEngine | AsyncConnection,
        table_names: Iterable[str] | None,
    ) -> None:
        """Truncate ``table_names`` with ``CASCADE`` in one batch.

        See ``jellyfin_pg.purge.purge_tables``.
        """
        await purge_tables(db, table_names)
