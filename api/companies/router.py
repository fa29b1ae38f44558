"""
Company API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core import db, errors

from . import schemas, service

router = APIRouter()


@router.get("/companies")
async def list_companies(database: db.Database = Depends(db.get_database)) -> dict:
    companies = await service.list_companies(database)
    return {"companies": companies}


@router.get("/companies/{code}")
async def get_company(code: str, database: db.Database = Depends(db.get_database)) -> dict:
    """
    One company with its invoice ids and industry names.
    """
    company = await service.get_company(database, code)
    return {"company": company}


@router.post("/companies", status_code=status.HTTP_201_CREATED)
async def create_company(
    request: schemas.CreateCompanyRequest,
    database: db.Database = Depends(db.get_database),
) -> dict:
    """
    Create a company; its code is derived from the name.
    """
    company = await service.create_company(database, request)
    return {"company": company}


@router.put("/companies/{code}", dependencies=[Depends(errors.forbid_body_fields("code"))])
async def update_company(
    code: str,
    request: schemas.UpdateCompanyRequest,
    database: db.Database = Depends(db.get_database),
) -> dict:
    company = await service.update_company(database, code, request)
    return {"company": company}


@router.delete("/companies/{code}")
async def delete_company(code: str, database: db.Database = Depends(db.get_database)) -> dict:
    return await service.delete_company(database, code)
