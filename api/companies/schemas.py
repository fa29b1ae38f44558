"""
Pydantic schemas for company endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateCompanyRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)


class UpdateCompanyRequest(BaseModel):
    # `code` is rejected by the route before this model is validated.
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
