"""Database provider protocol definition.

Defines the ``DatabaseProvider`` Protocol that the host calls into.  Hooks
the host needs for model setup are synchronous; maintenance and backup
operations are ``async def``.

Usage:
    from jellyfin_pg.providers.base import DatabaseProvider

    async def nightly(provider: DatabaseProvider) -> None:
        await provider.run_scheduled_optimisation()
        key = await provider.create_backup()
        await provider.delete_backup(key)
"""

from collections.abc import Iterable
from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from jellyfin_pg.config.models import DatabaseConfigurationOptions


class DatabaseProvider(Protocol):
    """Backend provider interface implemented for each database engine.

    This Protocol mirrors the host's plugin contract: configure a connection,
    take part in model building, run maintenance, and manage backups.
    """

    provider_key: str

    def initialise(
        self,
        configuration: DatabaseConfigurationOptions,
        **engine_kwargs: Any,
    ) -> AsyncEngine:
        """Resolve connection settings and create the async engine.

        Args:
            configuration: Database section of the host configuration.
            **engine_kwargs: Extra keyword arguments for the engine.

        Returns:
            The engine the host should bind its sessions to.
        """
        ...

    def on_model_creating(self, model_builder: Any) -> None:
        """Apply engine-specific model configuration."""
        ...

    def configure_conventions(self, builder: Any) -> None:
        """Apply engine-specific type conventions."""
        ...

    async def run_scheduled_optimisation(self) -> None:
        """Run periodic maintenance (vacuum, analyze, ...)."""
        ...

    async def run_shutdown_task(self) -> None:
        """Run work needed before the host shuts down."""
        ...

    async def create_backup(self) -> str:
        """Snapshot the database and return the backup key.

        Raises:
            ExternalToolError: If the dump tool fails.
            UnsupportedOperationError: If the backend cannot take backups.
        """
        ...

    async def restore_backup(self, key: str) -> None:
        """Restore the snapshot named ``key``.

        A missing snapshot is logged and ignored.

        Raises:
            ExternalToolError: If the restore tool fails.
            UnsupportedOperationError: If the backend cannot restore backups.
        """
        ...

    async def delete_backup(self, key: str) -> None:
        """Delete the snapshot named ``key``.

        A missing snapshot is logged and ignored.

        Raises:
            OSError: If the file cannot be removed.
            UnsupportedOperationError: If the backend cannot manage backups.
        """
        ...

    async def purge_tables(
        self,
        db: AsyncEngine | AsyncConnection,
        table_names: Iterable[str] | None,
    ) -> None:
        """Empty the given tables, cascading to dependent rows."""
        ...
