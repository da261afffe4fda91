"""Database providers package.

Provides the ``DatabaseProvider`` Protocol and the PostgreSQL
implementations.

Usage:
    from jellyfin_pg.providers import DatabaseProvider, PostgresDatabaseProvider
"""

from jellyfin_pg.providers.base import DatabaseProvider
from jellyfin_pg.providers.design_time import create_design_time_engine
from jellyfin_pg.providers.no_backup import NoBackupPostgresDatabaseProvider
from jellyfin_pg.providers.postgres import (
    PROVIDER_KEY,
    PostgresDatabaseProvider,
    create_async_engine_pooled,
)

__all__ = [
    "DatabaseProvider",
    "NoBackupPostgresDatabaseProvider",
    "create_design_time_engine",
    "PostgresDatabaseProvider",
    "PROVIDER_KEY",
    "create_async_engine_pooled",
]
