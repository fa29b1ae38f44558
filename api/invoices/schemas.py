"""
Pydantic schemas for invoice endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateInvoiceRequest(BaseModel):
    comp_code: str = Field(..., min_length=1, max_length=200)
    amt: float = Field(..., ge=0, allow_inf_nan=False)


class UpdateInvoiceRequest(BaseModel):
    # `id` is rejected by the route before this model is validated.
    amt: float = Field(..., ge=0, allow_inf_nan=False)
    # Omitted means "leave the paid state alone".
    paid: bool | None = None
