"""
Read-only lookup lists (raw SQL).

These tables are owned elsewhere; the API never writes to them.
"""

from __future__ import annotations

import asyncpg

from core import db


async def list_item_names(conn: asyncpg.Connection) -> list[dict]:
    return await db.fetch_all(
        conn,
        """
        SELECT itemname
        FROM listofitem
        """,
    )


async def list_student_titles(conn: asyncpg.Connection) -> list[dict]:
    return await db.fetch_all(
        conn,
        """
        SELECT title
        FROM student
        """,
    )
