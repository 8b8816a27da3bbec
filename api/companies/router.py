"""
Company API endpoints.
"""

from __future__ import annotations

from typing import Annotated

import asyncpg
from fastapi import APIRouter, Depends, HTTPException, Path, status
from fastapi.responses import JSONResponse

from core import db

from . import schemas, service
from .service import CompanyOutcome

router = APIRouter()

CompanyIdPath = Annotated[
    str,
    Path(min_length=1, max_length=schemas.COMPANY_ID_MAX_LENGTH),
]

_MESSAGES: dict[CompanyOutcome, tuple[int, str]] = {
    CompanyOutcome.CREATED: (status.HTTP_201_CREATED, "Company created successfully"),
    CompanyOutcome.UPDATED: (status.HTTP_200_OK, "Company updated successfully"),
    CompanyOutcome.DELETED: (status.HTTP_200_OK, "Company deleted successfully"),
}


def _respond(outcome: CompanyOutcome) -> JSONResponse:
    if outcome is CompanyOutcome.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found")
    if outcome is CompanyOutcome.NO_FIELDS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one field (companyName or companyCity) must be provided",
        )
    status_code, message = _MESSAGES[outcome]
    return JSONResponse(status_code=status_code, content={"message": message})


@router.get("/companies", response_model=schemas.CompanyListResponse)
async def list_companies(pool: asyncpg.Pool = Depends(db.get_pool)) -> dict:
    companies = await service.list_companies(pool)
    return {"companyList": companies}


@router.post(
    "/companies",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.MessageResponse,
)
async def create_company(
    payload: schemas.CreateCompanyRequest,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> JSONResponse:
    outcome = await service.create_company(pool, payload)
    return _respond(outcome)


@router.patch("/companies/{companyId}", response_model=schemas.MessageResponse)
async def patch_company(
    payload: schemas.PatchCompanyRequest,
    companyId: CompanyIdPath,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> JSONResponse:
    """
    Update name and/or city; only the supplied columns are written.
    """
    outcome = await service.patch_company(pool, companyId, payload)
    return _respond(outcome)


@router.put(
    "/companies/{companyId}",
    response_model=schemas.MessageResponse,
    responses={201: {"model": schemas.MessageResponse}},
)
async def upsert_company(
    payload: schemas.UpsertCompanyRequest,
    companyId: CompanyIdPath,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> JSONResponse:
    """
    Create the company, or overwrite its name and city if the id exists.
    Responds 201 for a new row and 200 for an update.
    """
    outcome = await service.upsert_company(pool, companyId, payload)
    return _respond(outcome)


@router.delete("/companies/{companyId}", response_model=schemas.MessageResponse)
async def delete_company(
    companyId: CompanyIdPath,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> JSONResponse:
    outcome = await service.delete_company(pool, companyId)
    return _respond(outcome)
