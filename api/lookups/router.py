"""
Lookup endpoints: every row, trimmed, no paging or sorting.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends

from core import db

from . import repository

router = APIRouter()


def _trimmed(rows: list[dict], column: str) -> list[str]:
    # Columns are fixed-width; NULL becomes "".
    return [str(row[column] or "").strip() for row in rows]


@router.get("/items")
async def list_items(pool: asyncpg.Pool = Depends(db.get_pool)) -> dict:
    async with db.connection(pool, action="list_items") as conn:
        rows = await repository.list_item_names(conn)
    return {"itemList": _trimmed(rows, "itemname")}


@router.get("/studenttitles")
async def list_student_titles(pool: asyncpg.Pool = Depends(db.get_pool)) -> dict:
    async with db.connection(pool, action="list_student_titles") as conn:
        rows = await repository.list_student_titles(conn)
    return {"titleList": _trimmed(rows, "title")}
