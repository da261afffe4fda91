"""Bulk table truncation.

Table names are interpolated into the statement inside double quotes with
no further escaping.  Callers must pass trusted identifiers only.

Usage:
    from jellyfin_pg.purge import purge_tables

    await purge_tables(engine, ["Users", "Devices"])
"""

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine


def build_purge_statement(table_names: Iterable[str]) -> str:
    """Build one ``TRUNCATE ... CASCADE`` statement per table, in order.

    Example:
        >>> print(build_purge_statement(["a", "b"]))
        TRUNCATE TABLE "a" CASCADE;
        TRUNCATE TABLE "b" CASCADE;
    """
    return "\n".join(f'TRUNCATE TABLE "{name}" CASCADE;' for name in table_names)


async def purge_tables(
    db: AsyncEngine | AsyncConnection,
    table_names: Iterable[str] | None,
) -> None:
    """Empty ``table_names`` and their dependent rows in a single batch.

    The statements are sent as one driver-level batch with no parameters.
    Given an ``AsyncEngine`` the batch runs inside ``engine.begin()``
    (commit on success, rollback on error); given an ``AsyncConnection``
    it runs in that connection's current transaction.

    Args:
        db: Engine or open connection to execute against.
        table_names: Tables to truncate.

    Raises:
        ValueError: If ``table_names`` is ``None``.
        sqlalchemy.exc.DBAPIError: If PostgreSQL rejects the batch.
    """
    if table_names is None:
        raise ValueError("table_names must not be None")

    statement = build_purge_statement(table_names)
    if not statement:
        return

    if isinstance(db, AsyncEngine):
        async with db.begin() as conn:
            await _execute_batch(conn, statement)
    else:
        await _execute_batch(db, statement)


async def _execute_batch(conn: AsyncConnection, statement: str) -> None:
    # no_parameters makes the driver receive the raw multi-statement text
    await conn.exec_driver_sql(
        statement, execution_options={"no_parameters": True}
    )
