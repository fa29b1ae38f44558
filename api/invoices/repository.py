"""
Invoice persistence (raw SQL).
"""

from __future__ import annotations

from datetime import date
from typing import Any

from core import db


async def list_invoices(conn: db.Executor) -> list[dict[str, Any]]:
    return await conn.fetch_all(
        """
        SELECT id, comp_code
        FROM invoices
        """
    )


async def get_invoice(conn: db.Executor, invoice_id: int) -> dict[str, Any] | None:
    return await conn.fetch_one(
        """
        SELECT id, comp_code, amt, paid, add_date, paid_date
        FROM invoices
        WHERE id = $1
        """,
        invoice_id,
    )


async def lock_invoice(conn: db.Executor, invoice_id: int) -> dict[str, Any] | None:
    """
    Read an invoice and hold a row lock until the surrounding transaction ends.
    """
    return await conn.fetch_one(
        """
        SELECT id, comp_code, amt, paid, add_date, paid_date
        FROM invoices
        WHERE id = $1
        FOR UPDATE
        """,
        invoice_id,
    )


async def insert_invoice(conn: db.Executor, *, comp_code: str, amt: float) -> dict[str, Any]:
    # paid, add_date and paid_date come from column defaults.
    row = await conn.fetch_one(
        """
        INSERT INTO invoices (comp_code, amt)
        VALUES ($1, $2)
        RETURNING id, comp_code, amt, paid, add_date, paid_date
        """,
        comp_code,
        amt,
    )
    if row is None:
        raise RuntimeError("Failed to insert invoice.")
    return row


async def update_invoice(
    conn: db.Executor,
    invoice_id: int,
    *,
    amt: float,
    paid: bool,
    paid_date: date | None,
) -> dict[str, Any] | None:
    return await conn.fetch_one(
        """
        UPDATE invoices
        SET amt = $2,
            paid = $3,
            paid_date = $4
        WHERE id = $1
        RETURNING id, comp_code, amt, paid, add_date, paid_date
        """,
        invoice_id,
        amt,
        paid,
        paid_date,
    )


async def delete_invoice(conn: db.Executor, invoice_id: int) -> dict[str, Any] | None:
    return await conn.fetch_one(
        """
        DELETE FROM invoices
        WHERE id = $1
        RETURNING id
        """,
        invoice_id,
    )
