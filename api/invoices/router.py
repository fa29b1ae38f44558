"""
Invoice API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core import db, errors

from . import schemas, service

router = APIRouter()


@router.get("/invoices")
async def list_invoices(database: db.Database = Depends(db.get_database)) -> dict:
    invoices = await service.list_invoices(database)
    return {"invoices": invoices}


@router.get("/invoices/{invoice_id}")
async def get_invoice(invoice_id: int, database: db.Database = Depends(db.get_database)) -> dict:
    """
    One invoice with its owning company nested under `company`.
    """
    invoice = await service.get_invoice(database, invoice_id)
    return {"invoice": invoice}


@router.post("/invoices", status_code=status.HTTP_201_CREATED)
async def create_invoice(
    request: schemas.CreateInvoiceRequest,
    database: db.Database = Depends(db.get_database),
) -> dict:
    invoice = await service.create_invoice(database, request)
    return {"invoice": invoice}


@router.put("/invoices/{invoice_id}", dependencies=[Depends(errors.forbid_body_fields("id"))])
async def update_invoice(
    invoice_id: int,
    request: schemas.UpdateInvoiceRequest,
    database: db.Database = Depends(db.get_database),
) -> dict:
    """
    Update the amount and (optionally) the paid flag of an invoice.
    """
    invoice = await service.update_invoice(database, invoice_id, request)
    return {"invoice": invoice}


@router.delete("/invoices/{invoice_id}")
async def delete_invoice(invoice_id: int, database: db.Database = Depends(db.get_database)) -> dict:
    return await service.delete_invoice(database, invoice_id)
