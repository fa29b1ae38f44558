"""
Pydantic schemas for industry endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateIndustryRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)


class AssociateCompanyRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=200)
