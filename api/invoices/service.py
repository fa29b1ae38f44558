"""
Invoice business logic.

Paid-state rules on update:
- unpaid -> paid: `paid_date` becomes today
- paid -> paid: `paid_date` is kept
- anything -> unpaid: `paid_date` is cleared
"""

from __future__ import annotations

import logging
from datetime import date

from companies import repository as company_repository
from core import db
from core.errors import NotFoundError

from . import repository, schemas

logger = logging.getLogger(__name__)


def _today() -> date:
    return date.today()


def resolve_payment(
    *,
    currently_paid: bool,
    current_paid_date: date | None,
    paid: bool | None,
    today: date,
) -> tuple[bool, date | None]:
    """
    Return the (paid, paid_date) pair an invoice should hold after an update.
    """
    if paid is None:
        return currently_paid, current_paid_date
    if not paid:
        return False, None
    if currently_paid and current_paid_date is not None:
        return True, current_paid_date
    return True, today


async def list_invoices(database: db.Database) -> list[dict]:
    rows = await repository.list_invoices(database)
    return [{"id": int(row["id"]), "comp_code": str(row["comp_code"])} for row in rows]


async def get_invoice(database: db.Database, invoice_id: int) -> dict:
    invoice = await repository.get_invoice(database, invoice_id)
    if invoice is None:
        raise NotFoundError(f"There is no invoice with id '{invoice_id}'.")

    company = await company_repository.get_company(database, str(invoice["comp_code"]))
    result = {key: value for key, value in invoice.items() if key != "comp_code"}
    result["company"] = company
    return result


async def create_invoice(database: db.Database, payload: schemas.CreateInvoiceRequest) -> dict:
    comp_code = payload.comp_code.strip()
    if not await company_repository.company_exists(database, comp_code):
        raise NotFoundError(f"There is no company with code '{comp_code}'.")

    row = await repository.insert_invoice(database, comp_code=comp_code, amt=payload.amt)
    logger.info("invoice_created id=%s comp_code=%s", row["id"], comp_code)
    return row


async def update_invoice(
    database: db.Database,
    invoice_id: int,
    payload: schemas.UpdateInvoiceRequest,
) -> dict:
    async with database.transaction() as tx:
        current = await repository.lock_invoice(tx, invoice_id)
        if current is None:
            raise NotFoundError(f"There is no invoice with id '{invoice_id}'.")

        paid, paid_date = resolve_payment(
            currently_paid=bool(current["paid"]),
            current_paid_date=current["paid_date"],
            paid=payload.paid,
            today=_today(),
        )
        row = await repository.update_invoice(
            tx,
            invoice_id,
            amt=payload.amt,
            paid=paid,
            paid_date=paid_date,
        )

    if row is None:
        raise NotFoundError(f"There is no invoice with id '{invoice_id}'.")
    logger.info("invoice_updated id=%s paid=%s", invoice_id, paid)
    return row


async def delete_invoice(database: db.Database, invoice_id: int) -> dict:
    row = await repository.delete_invoice(database, invoice_id)
    if row is None:
        raise NotFoundError(f"There is no invoice with id '{invoice_id}'.")
    logger.info("invoice_deleted id=%s", invoice_id)
    return {"message": f"invoice {invoice_id} deleted"}
