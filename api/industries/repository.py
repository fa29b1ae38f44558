"""
Industry persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db


async def list_industries_with_companies(conn: db.Executor) -> list[dict[str, Any]]:
    """
    Every industry with the codes of its linked companies in link order (`[]` when none).
    """
    return await conn.fetch_all(
        """
        SELECT
          i.id,
          i.name,
          COALESCE(
            array_agg(ic.company_code ORDER BY ic.linked_at, ic.company_code)
              FILTER (WHERE ic.company_code IS NOT NULL),
            '{}'::text[]
          ) AS companies
        FROM industries i
        LEFT JOIN industries_companies ic ON ic.industry_id = i.id
        GROUP BY i.id, i.name
        ORDER BY i.id
        """
    )


async def get_industry(conn: db.Executor, industry_id: int) -> dict[str, Any] | None:
    return await conn.fetch_one(
        """
        SELECT id, name
        FROM industries
        WHERE id = $1
        """,
        industry_id,
    )


async def list_company_codes(conn: db.Executor, industry_id: int) -> list[str]:
    rows = await conn.fetch_all(
        """
        SELECT company_code
        FROM industries_companies
        WHERE industry_id = $1
        ORDER BY linked_at, company_code
        """,
        industry_id,
    )
    return [str(r["company_code"]) for r in rows]


async def insert_industry(conn: db.Executor, *, name: str) -> dict[str, Any]:
    row = await conn.fetch_one(
        """
        INSERT INTO industries (name)
        VALUES ($1)
        RETURNING id, name
        """,
        name,
    )
    if row is None:
        raise RuntimeError("Failed to insert industry.")
    return row


async def link_company(conn: db.Executor, *, industry_id: int, company_code: str) -> bool:
    """
    Link a company to an industry. Returns False when the link already existed.
    """
    row = await conn.fetch_one(
        """
        INSERT INTO industries_companies (industry_id, company_code)
        VALUES ($1, $2)
        ON CONFLICT (industry_id, company_code) DO NOTHING
        RETURNING industry_id
        """,
        industry_id,
        company_code,
    )
    return row is not None
