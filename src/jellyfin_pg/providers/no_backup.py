"""PostgreSQL provider for hosts without the client backup tools.

Connection handling and table purging behave like
``PostgresDatabaseProvider``; every backup operation raises
``UnsupportedOperationError`` so callers can tell "not available on this
backend" apart from success.
"""

from jellyfin_pg.errors import UnsupportedOperationError
from jellyfin_pg.providers.postgres import PostgresDatabaseProvider


class NoBackupPostgresDatabaseProvider(PostgresDatabaseProvider):
    """``PostgresDatabaseProvider`` with backups disabled."""

    async def create_backup(self) -> str:
        raise UnsupportedOperationError(
            "Backups are not supported without pg_dump/pg_restore"
        )

    async def restore_backup(self, key: str) -> None:
        raise UnsupportedOperationError(
            "Restoring backups is not supported without pg_dump/pg_restore"
        )

    async def delete_backup(self, key: str) -> None:
        raise UnsupportedOperationError(
            "Deleting backups is not supported without pg_dump/pg_restore"
        )
