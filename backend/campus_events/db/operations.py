"""
Dialect-aware storage primitives.
"""

from sqlalchemy import Table
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

_INSERT_BUILDERS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


async def insert_if_absent(db: AsyncSession, table: Table, values: dict) -> bool:
    """
    Atomically insert a row unless one with the same key already exists.

    Emits INSERT ... ON CONFLICT DO NOTHING, so uniqueness is decided by the
    table's primary key inside the database rather than by a prior read.
    Returns True if the row was created, False if it was already present.
    """
    dialect = db.get_bind().dialect.name
    builder = _INSERT_BUILDERS.get(dialect)
    if builder is None:
        raise NotImplementedError(f"insert_if_absent is not supported on {dialect}")

    stmt = builder(table).values(**values).on_conflict_do_nothing()
    result = await db.execute(stmt)
    return result.rowcount == 1
