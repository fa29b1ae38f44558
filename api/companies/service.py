"""
Company business logic.

Scope:
- slug-derived company codes
- company detail with invoice ids and industry names
- create / update / delete with typed errors
"""

from __future__ import annotations

import logging
import re
import unicodedata

import asyncpg

from core import db
from core.errors import ConflictError, InvalidRequestError, NotFoundError

from . import repository, schemas

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """
    Lowercase `value`, fold accents to ASCII, and collapse every run of other
    characters into a single "-". "Yahoo!" -> "yahoo", "Acme Corp." -> "acme-corp".
    """
    folded = unicodedata.normalize("NFKD", value or "").encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", folded.lower()).strip("-")


async def list_companies(database: db.Database) -> list[dict]:
    rows = await repository.list_companies(database)
    return [{"code": str(row["code"]), "name": str(row["name"])} for row in rows]


async def get_company(database: db.Database, code: str) -> dict:
    company = await repository.get_company(database, code)
    if company is None:
        raise NotFoundError(f"There is no company with code '{code}'.")

    invoice_ids = await repository.list_invoice_ids(database, code)
    industries = await repository.list_industry_names(database, code)
    return {
        "code": company["code"],
        "name": company["name"],
        "description": company["description"],
        "invoices": invoice_ids,
        "industries": industries,
    }


async def create_company(database: db.Database, payload: schemas.CreateCompanyRequest) -> dict:
    name = payload.name.strip()
    code = slugify(name)
    if not code:
        raise InvalidRequestError("Company name must contain at least one letter or digit.")

    try:
        row = await repository.insert_company(
            database,
            code=code,
            name=name,
            description=payload.description,
        )
    except asyncpg.UniqueViolationError as exc:
        raise ConflictError(f"A company with code '{code}' already exists.") from exc
    logger.info("company_created code=%s", code)
    return row


async def update_company(
    database: db.Database,
    code: str,
    payload: schemas.UpdateCompanyRequest,
) -> dict:
    row = await repository.update_company(
        database,
        code,
        name=payload.name.strip(),
        description=payload.description,
    )
    if row is None:
        raise NotFoundError(f"There is no company with code '{code}'.")
    logger.info("company_updated code=%s", code)
    return row


async def delete_company(database: db.Database, code: str) -> dict:
    row = await repository.delete_company(database, code)
    if row is None:
        raise NotFoundError(f"There is no company with code '{code}'.")
    logger.info("company_deleted code=%s", code)
    return {"message": f"{code} deleted"}
