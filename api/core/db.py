"""
Async database access helpers (raw SQL) using asyncpg.

The pool is created once per process by the app lifespan (see
`api/main.py`) and kept on `app.state.pool`. Handlers receive it through the
`get_pool` dependency and hold a connection only inside `connection(...)`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import asyncpg
from fastapi import HTTPException, Request

from . import settings
from .errors import InternalError

logger = logging.getLogger(__name__)


async def create_pool() -> asyncpg.Pool:
    pool = await asyncpg.create_pool(
        dsn=settings.database_url(),
        min_size=settings.pool_min_size(),
        max_size=settings.pool_max_size(),
        command_timeout=settings.command_timeout_s(),
    )
    logger.info(
        "db_pool_created min_size=%s max_size=%s",
        settings.pool_min_size(),
        settings.pool_max_size(),
    )
    return pool


async def close_pool(pool: asyncpg.Pool | None) -> None:
    if pool is None:
        return None
    await pool.close()
    logger.info("db_pool_closed")


def get_pool(request: Request) -> asyncpg.Pool:
    pool = getattr(request.app.state, "pool", None)
    if pool is None:
        raise RuntimeError("DB pool is not initialized. Create it in the app lifespan.")
    return pool


@asynccontextmanager
async def connection(pool: asyncpg.Pool, *, action: str) -> AsyncIterator[asyncpg.Connection]:
    """
    Hold one pooled connection for the duration of the block.

    The connection goes back to the pool on every exit path. Anything that
    goes wrong while acquiring or using it (other than an HTTP error raised
    on purpose) is logged under `action` and surfaces as `InternalError`.
    """
    try:
        async with pool.acquire(timeout=settings.acquire_timeout_s()) as conn:
            yield conn
    except (HTTPException, InternalError):
        raise
    except Exception as exc:
        logger.exception("db_action_failed action=%s", action)
        raise InternalError(action) from exc


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(conn: asyncpg.Connection, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    row = await conn.fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(conn: asyncpg.Connection, sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await conn.fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def execute(conn: asyncpg.Connection, sql: str, *args: Any) -> str:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL) and return the status tag,
    e.g. "INSERT 0 1".
    """
    return await conn.execute(sql, *args)
