"""
Tailors Backend - Schema Bootstrapper
=====================================

What:  Makes sure the tables and columns the application needs exist before
       the server accepts traffic.
How:   Two phases on one connection, inside one transaction:

    1. Create-if-absent: ``Base.metadata.create_all(checkfirst=True)`` for
       customers, measurements and orders. Existing tables are left alone.
    2. Column migration: introspect the live column names of ``orders`` and
       add any column from ``ORDER_COLUMN_MIGRATIONS`` that is missing,
       using alembic's ``Operations.add_column``.

Properties:
    - Idempotent: a second run issues no DDL at all.
    - Additive only: nothing is dropped, renamed or altered in place.
    - No version table: what to do is decided from the live schema.
    - Phase 2 only starts after phase 1 finished, so ``orders`` exists.

Any failure is raised as SchemaBootstrapError; the lifespan lets it escape
so the process never serves traffic on an unverified schema.
"""

import logging
from typing import Callable, List, Sequence, Tuple

from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext
from sqlalchemy import Column, Connection, Date, Numeric, String, inspect, text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from tailors.database import Base
from tailors.exceptions import SchemaBootstrapError
from tailors.models import Customer, Measurement, Order

logger = logging.getLogger(__name__)

CORE_TABLES = (Customer.__table__, Measurement.__table__, Order.__table__)

# (column name, factory for the Column to add). Factories because a Column
# object can only ever belong to one Table.
ColumnMigration = Tuple[str, Callable[[], Column]]

ORDER_COLUMN_MIGRATIONS: Sequence[ColumnMigration] = (
    (
        "paid_amount",
        lambda: Column("paid_amount", Numeric(10, 2), nullable=False, server_default=text("0")),
    ),
    ("payment_mode", lambda: Column("payment_mode", String(30), nullable=True)),
    ("payment_date", lambda: Column("payment_date", Date, nullable=True)),
    ("trial_date", lambda: Column("trial_date", Date, nullable=True)),
)


def _create_core_tables(sync_conn: Connection) -> None:
    Base.metadata.create_all(sync_conn, tables=list(CORE_TABLES), checkfirst=True)


def _add_missing_columns(
    sync_conn: Connection,
    table_name: str,
    migrations: Sequence[ColumnMigration],
) -> List[str]:
    existing = {column["name"] for column in inspect(sync_conn).get_columns(table_name)}
    op = Operations(MigrationContext.configure(sync_conn))

    added: List[str] = []
    for name, make_column in migrations:
        if name in existing:
            continue
        op.add_column(table_name, make_column())
        added.append(name)
        logger.info("Added missing column: %s.%s", table_name, name)
    return added


async def ensure_core_tables(conn: AsyncConnection) -> None:
    """Phase 1: create customers, measurements and orders if absent."""
    await conn.run_sync(_create_core_tables)


async def ensure_order_columns(
    conn: AsyncConnection,
    migrations: Sequence[ColumnMigration] = ORDER_COLUMN_MIGRATIONS,
) -> List[str]:
    """
    Phase 2: add columns missing from ``orders``.

    Returns:
        Names of the columns that were added, in migration order. Empty
        when the table was already up to date.
    """
    return await conn.run_sync(_add_missing_columns, Order.__tablename__, migrations)


async def bootstrap_schema(engine: AsyncEngine) -> List[str]:
    """
    Run both phases in order inside a single transaction.

    Raises:
        SchemaBootstrapError: either phase failed. ``phase`` names which one.
    """
    phase = "create_tables"
    try:
        async with engine.begin() as conn:
            await ensure_core_tables(conn)
            phase = "add_columns"
            added = await ensure_order_columns(conn)
    except Exception as exc:
        raise SchemaBootstrapError(
            message=f"Schema bootstrap failed during {phase}: {exc}",
            phase=phase,
            context={"error": str(exc)},
        ) from exc

    if added:
        logger.info("Schema bootstrap added %d column(s) to orders", len(added))
    else:
        logger.info("Schema bootstrap: schema already up to date")
    return added
