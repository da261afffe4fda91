"""Engine used by schema tooling when no host configuration exists.

Only migration generation uses this.  Creating the engine does not open a
connection, so the default credentials need not be valid.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine

from jellyfin_pg.config.models import ConnectionInfo
from jellyfin_pg.providers.postgres import create_async_engine_pooled

DESIGN_TIME_CONNECTION = ConnectionInfo(
    host="localhost",
    database="jellyfin",
    username="jellyfin",
    password="jellyfin",
)


def create_design_time_engine(**kwargs: Any) -> AsyncEngine:
    """Create an engine for ``jellyfin@localhost/jellyfin``."""
    return create_async_engine_pooled(DESIGN_TIME_CONNECTION.url(), **kwargs)
