"""
Async database access helpers (raw SQL) using asyncpg.

Every request opens its own connection and closes it before the response is
sent; connections are never pooled or shared. `init_schema` runs once from
the FastAPI lifespan (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import asyncpg

from .settings import Settings

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS blogs (
    id INTEGER GENERATED ALWAYS AS IDENTITY PRIMARY KEY,
    title VARCHAR(255) NOT NULL,
    description VARCHAR(2000) NOT NULL,
    "createdAt" TIMESTAMPTZ NOT NULL DEFAULT now(),
    "updatedAt" TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""


class DatabaseError(RuntimeError):
    pass


# Database unreachable, credentials rejected or connect timed out.
class DatabaseConnectionError(DatabaseError):
    pass


# Statement failed: constraint violation, bad parameter, lost connection.
class StorageError(DatabaseError):
    pass


async def acquire(settings: Settings) -> asyncpg.Connection:
    """
    Open a new connection or raise DatabaseConnectionError.
    """
    try:
        return await asyncpg.connect(
            dsn=settings.database_url,
            timeout=settings.connect_timeout_s,
            command_timeout=settings.command_timeout_s,
        )
    except (OSError, asyncio.TimeoutError, asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
        raise DatabaseConnectionError(f"Could not connect to database: {exc}") from exc


async def release(conn: asyncpg.Connection) -> None:
    """
    Close a connection. Safe on an already-closed handle.
    """
    if conn.is_closed():
        return None
    try:
        await conn.close()
    except Exception:
        logger.exception("connection_close_failed")
        conn.terminate()


@asynccontextmanager
async def connection(settings: Settings) -> AsyncIterator[asyncpg.Connection]:
    conn = await acquire(settings)
    try:
        yield conn
    finally:
        await release(conn)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_all(conn: asyncpg.Connection, sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    try:
        rows = await conn.fetch(sql, *args)
    except (asyncpg.PostgresError, asyncpg.InterfaceError, asyncio.TimeoutError) as exc:
        raise StorageError(str(exc) or exc.__class__.__name__) from exc
    return [_record_to_dict(r) for r in rows]


async def execute(conn: asyncpg.Connection, sql: str, *args: Any) -> str:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL) and return its status tag,
    e.g. "UPDATE 0".
    """
    try:
        return await conn.execute(sql, *args)
    except (asyncpg.PostgresError, asyncpg.InterfaceError, asyncio.TimeoutError) as exc:
        raise StorageError(str(exc) or exc.__class__.__name__) from exc


async def init_schema(settings: Settings) -> None:
    """
    Create the blogs table if it does not exist yet.
    """
    async with connection(settings) as conn:
        await execute(conn, SCHEMA_SQL)
    logger.info("schema_ready table=blogs")
