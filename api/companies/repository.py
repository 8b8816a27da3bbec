"""
Company persistence (raw SQL).

Each function runs exactly one statement on the connection it is given.
Not-found is reported by the statement itself (no row comes back from
`RETURNING`), never by a separate existence check.
"""

from __future__ import annotations

import asyncpg

from core import db

# Column for each patchable field, in statement order.
PATCH_COLUMNS: dict[str, str] = {
    "company_name": "company_name",
    "company_city": "company_city",
}


async def list_companies(conn: asyncpg.Connection) -> list[dict]:
    return await db.fetch_all(
        conn,
        """
        SELECT company_id, company_name, company_city
        FROM company
        """,
    )


async def insert_company(
    conn: asyncpg.Connection,
    *,
    company_id: str,
    company_name: str,
    company_city: str,
) -> None:
    await db.execute(
        conn,
        """
        INSERT INTO company (company_id, company_name, company_city)
        VALUES ($1, $2, $3)
        """,
        company_id,
        company_name,
        company_city,
    )


def build_update_sql(fields: dict[str, str]) -> tuple[str, list[str]]:
    """
    Build an UPDATE touching only the supplied columns.

    `fields` maps attribute names (see PATCH_COLUMNS) to new values. The
    company id is always the last positional argument.
    """
    assignments: list[str] = []
    values: list[str] = []
    for attr, column in PATCH_COLUMNS.items():
        if attr not in fields:
            continue
        values.append(fields[attr])
        assignments.append(f"{column} = ${len(values)}")

    if not assignments:
        raise ValueError("No columns to update.")

    sql = (
        "UPDATE company SET "
        + ", ".join(assignments)
        + f" WHERE company_id = ${len(values) + 1} RETURNING company_id"
    )
    return sql, values


async def update_company(
    conn: asyncpg.Connection,
    company_id: str,
    fields: dict[str, str],
) -> bool:
    sql, values = build_update_sql(fields)
    row = await db.fetch_one(conn, sql, *values, company_id)
    return row is not None


async def upsert_company(
    conn: asyncpg.Connection,
    *,
    company_id: str,
    company_name: str,
    company_city: str,
) -> bool:
    """
    Insert or overwrite name and city. Returns True when a new row was
    inserted, False when an existing one was updated.
    """
    # xmax is 0 only for a tuple version created by this INSERT.
    row = await db.fetch_one(
        conn,
        """
        INSERT INTO company (company_id, company_name, company_city)
        VALUES ($1, $2, $3)
        ON CONFLICT (company_id) DO UPDATE
        SET company_name = EXCLUDED.company_name,
            company_city = EXCLUDED.company_city
        RETURNING (xmax = 0) AS inserted
        """,
        company_id,
        company_name,
        company_city,
    )
    if row is None:
        raise RuntimeError("Failed to upsert company.")
    return bool(row["inserted"])


async def delete_company(conn: asyncpg.Connection, company_id: str) -> bool:
    row = await db.fetch_one(
        conn,
        """
        DELETE FROM company
        WHERE company_id = $1
        RETURNING company_id
        """,
        company_id,
    )
    return row is not None
