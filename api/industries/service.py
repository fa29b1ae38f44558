"""
Industry business logic.

Associating a company is idempotent: linking the same pair twice leaves one link.
"""

from __future__ import annotations

import logging

from companies import repository as company_repository
from core import db
from core.errors import NotFoundError

from . import repository, schemas

logger = logging.getLogger(__name__)


async def list_industries(database: db.Database) -> list[dict]:
    rows = await repository.list_industries_with_companies(database)
    return [
        {
            "id": int(row["id"]),
            "name": str(row["name"]),
            "companies": [str(code) for code in (row["companies"] or [])],
        }
        for row in rows
    ]


async def create_industry(database: db.Database, payload: schemas.CreateIndustryRequest) -> dict:
    row = await repository.insert_industry(database, name=payload.name.strip())
    logger.info("industry_created id=%s", row["id"])
    return row


async def associate_company(
    database: db.Database,
    industry_id: int,
    payload: schemas.AssociateCompanyRequest,
) -> dict:
    code = payload.code.strip()

    async with database.transaction() as tx:
        industry = await repository.get_industry(tx, industry_id)
        if industry is None:
            raise NotFoundError(f"There is no industry with id '{industry_id}'.")

        if not await company_repository.company_exists(tx, code):
            raise NotFoundError(f"There is no company with code '{code}'.")

        created = await repository.link_company(tx, industry_id=industry_id, company_code=code)
        companies = await repository.list_company_codes(tx, industry_id)

    logger.info(
        "industry_company_linked industry_id=%s code=%s created=%s",
        industry_id,
        code,
        created,
    )
    return {
        "id": int(industry["id"]),
        "name": str(industry["name"]),
        "companies": companies,
    }
