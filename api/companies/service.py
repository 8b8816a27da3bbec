"""
Company business logic.

Every operation holds one pooled connection for one statement and reports
what happened as a `CompanyOutcome`; turning outcomes into HTTP responses is
the router's job.
"""

from __future__ import annotations

import enum
import logging

import asyncpg

from core import db

from . import repository, schemas

logger = logging.getLogger(__name__)


class CompanyOutcome(enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    NO_FIELDS = "no_fields"


def _clean(value: object) -> str:
    return str(value or "").strip()


async def list_companies(pool: asyncpg.Pool) -> list[dict]:
    async with db.connection(pool, action="list_companies") as conn:
        rows = await repository.list_companies(conn)
    return [
        {
            "id": _clean(row["company_id"]),
            "name": _clean(row["company_name"]),
            "city": _clean(row["company_city"]),
        }
        for row in rows
    ]


async def create_company(pool: asyncpg.Pool, payload: schemas.CreateCompanyRequest) -> CompanyOutcome:
    # A duplicate id is a database error like any other: no distinct conflict status.
    async with db.connection(pool, action="create_company") as conn:
        await repository.insert_company(
            conn,
            company_id=payload.company_id,
            company_name=payload.company_name,
            company_city=payload.company_city,
        )
    logger.info("company_created company_id=%s", payload.company_id)
    return CompanyOutcome.CREATED


async def patch_company(
    pool: asyncpg.Pool,
    company_id: str,
    payload: schemas.PatchCompanyRequest,
) -> CompanyOutcome:
    fields = payload.model_dump(include=set(repository.PATCH_COLUMNS), exclude_none=True)
    if not fields:
        return CompanyOutcome.NO_FIELDS

    async with db.connection(pool, action="patch_company") as conn:
        found = await repository.update_company(conn, company_id, fields)
    if not found:
        return CompanyOutcome.NOT_FOUND

    logger.info("company_patched company_id=%s fields=%s", company_id, ",".join(sorted(fields)))
    return CompanyOutcome.UPDATED


async def upsert_company(
    pool: asyncpg.Pool,
    company_id: str,
    payload: schemas.UpsertCompanyRequest,
) -> CompanyOutcome:
    async with db.connection(pool, action="upsert_company") as conn:
        inserted = await repository.upsert_company(
            conn,
            company_id=company_id,
            company_name=payload.company_name,
            company_city=payload.company_city,
        )
    outcome = CompanyOutcome.CREATED if inserted else CompanyOutcome.UPDATED
    logger.info("company_upserted company_id=%s outcome=%s", company_id, outcome.value)
    return outcome


async def delete_company(pool: asyncpg.Pool, company_id: str) -> CompanyOutcome:
    async with db.connection(pool, action="delete_company") as conn:
        found = await repository.delete_company(conn, company_id)
    if not found:
        return CompanyOutcome.NOT_FOUND

    logger.info("company_deleted company_id=%s", company_id)
    return CompanyOutcome.DELETED
