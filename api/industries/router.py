"""
Industry API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core import db

from . import schemas, service

router = APIRouter()


@router.get("/industries")
async def list_industries(database: db.Database = Depends(db.get_database)) -> dict:
    industries = await service.list_industries(database)
    return {"industries": industries}


@router.post("/industries", status_code=status.HTTP_201_CREATED)
async def create_industry(
    request: schemas.CreateIndustryRequest,
    database: db.Database = Depends(db.get_database),
) -> dict:
    industry = await service.create_industry(database, request)
    return {"industry": industry}


@router.put("/industries/{industry_id}")
async def associate_company(
    industry_id: int,
    request: schemas.AssociateCompanyRequest,
    database: db.Database = Depends(db.get_database),
) -> dict:
    """
    Link the company in the body to this industry; returns the full link set.
    """
    industry = await service.associate_company(database, industry_id, request)
    return {"industry": industry}
