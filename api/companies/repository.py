"""
Company persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db


async def list_companies(conn: db.Executor) -> list[dict[str, Any]]:
    return await conn.fetch_all(
        """
        SELECT code, name
        FROM companies
        """
    )


async def get_company(conn: db.Executor, code: str) -> dict[str, Any] | None:
    return await conn.fetch_one(
        """
        SELECT code, name, description
        FROM companies
        WHERE code = $1
        """,
        code,
    )


async def company_exists(conn: db.Executor, code: str) -> bool:
    row = await conn.fetch_one(
        """
        SELECT 1 AS ok
        FROM companies
        WHERE code = $1
        LIMIT 1
        """,
        code,
    )
    return row is not None


async def list_invoice_ids(conn: db.Executor, code: str) -> list[int]:
    rows = await conn.fetch_all(
        """
        SELECT id
        FROM invoices
        WHERE comp_code = $1
        ORDER BY id
        """,
        code,
    )
    return [int(r["id"]) for r in rows]


async def list_industry_names(conn: db.Executor, code: str) -> list[str]:
    rows = await conn.fetch_all(
        """
        SELECT i.name
        FROM industries i
        JOIN industries_companies ic ON ic.industry_id = i.id
        WHERE ic.company_code = $1
        ORDER BY i.id
        """,
        code,
    )
    return [str(r["name"]) for r in rows]


async def insert_company(
    conn: db.Executor,
    *,
    code: str,
    name: str,
    description: str,
) -> dict[str, Any]:
    row = await conn.fetch_one(
        """
        INSERT INTO companies (code, name, description)
        VALUES ($1, $2, $3)
        RETURNING code, name, description
        """,
        code,
        name,
        description,
    )
    if row is None:
        raise RuntimeError("Failed to insert company.")
    return row


async def update_company(
    conn: db.Executor,
    code: str,
    *,
    name: str,
    description: str | None,
) -> dict[str, Any] | None:
    """
    Returns the updated row, or None when no company has `code`.
    A NULL description keeps the stored one.
    """
    return await conn.fetch_one(
        """
        UPDATE companies
        SET name = $2,
            description = COALESCE($3, description)
        WHERE code = $1
        RETURNING code, name, description
        """,
        code,
        name,
        description,
    )


async def delete_company(conn: db.Executor, code: str) -> dict[str, Any] | None:
    return await conn.fetch_one(
        """
        DELETE FROM companies
        WHERE code = $1
        RETURNING code
        """,
        code,
    )
