"""
Full flow against a real PostgreSQL. Skipped unless TEST_DATABASE_URL
points at a disposable database.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from core import db
from main import app

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "").strip()
SCHEMA_SQL = Path(__file__).resolve().parents[1] / "sql" / "schema.sql"

pytestmark = pytest.mark.skipif(not TEST_DATABASE_URL, reason="TEST_DATABASE_URL is not set")


@pytest.fixture
async def pg_client(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", TEST_DATABASE_URL)
    pool = await db.create_pool()
    async with pool.acquire() as conn:
        await conn.execute(SCHEMA_SQL.read_text(encoding="utf-8"))
        await conn.execute("TRUNCATE company, listofitem, student")
        await conn.execute("INSERT INTO listofitem (itemname) VALUES ('Pencil'), ('Eraser')")
        await conn.execute("INSERT INTO student (title) VALUES ('Mr')")

    app.state.pool = pool
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            yield c
    finally:
        app.state.pool = None
        await db.close_pool(pool)


async def test_company_lifecycle(pg_client):
    created = await pg_client.post(
        "/api/companies",
        json={"companyId": "C001", "companyName": "TechCorp", "companyCity": "San Francisco"},
    )
    assert created.status_code == 201

    listed = await pg_client.get("/api/companies")
    assert listed.json() == {"companyList": [{"id": "C001", "name": "TechCorp", "city": "San Francisco"}]}

    duplicate = await pg_client.post(
        "/api/companies",
        json={"companyId": "C001", "companyName": "Again", "companyCity": "Again"},
    )
    assert duplicate.status_code == 500

    patched = await pg_client.patch("/api/companies/C001", json={"companyCity": "Austin"})
    assert patched.status_code == 200

    missing = await pg_client.patch("/api/companies/C404", json={"companyCity": "Austin"})
    assert missing.status_code == 404

    deleted = await pg_client.delete("/api/companies/C001")
    assert deleted.status_code == 200
    assert (await pg_client.delete("/api/companies/C001")).status_code == 404
    assert (await pg_client.get("/api/companies")).json() == {"companyList": []}


async def test_upsert_distinguishes_insert_from_update(pg_client):
    payload = {"companyName": "Acme", "companyCity": "Paris"}

    first = await pg_client.put("/api/companies/C777", json=payload)
    second = await pg_client.put("/api/companies/C777", json=payload)

    assert (first.status_code, second.status_code) == (201, 200)
    assert (await pg_client.get("/api/companies")).json() == {
        "companyList": [{"id": "C777", "name": "Acme", "city": "Paris"}],
    }


async def test_lookups(pg_client):
    items = (await pg_client.get("/api/items")).json()["itemList"]

    assert sorted(items) == ["Eraser", "Pencil"]
    assert (await pg_client.get("/api/studenttitles")).json() == {"titleList": ["Mr"]}
