"""
Shared fixtures.

HTTP tests drive the ASGI app directly. The repository functions are swapped for an
in-memory store, so these tests need no PostgreSQL; see `tests/integration/` for the
same flows against a real database.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import date
from typing import Any

import asyncpg
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from companies import repository as company_repository
from core import db
from industries import repository as industry_repository
from invoices import repository as invoice_repository
from main import app as fastapi_app


class FakeDatabase:
    """
    Stands in for `core.db.Database`; the patched repositories ignore it.
    """

    def __init__(self) -> None:
        self.transactions = 0
        self.healthy = True

    @asynccontextmanager
    async def transaction(self):
        self.transactions += 1
        yield self

    async def ping(self) -> bool:
        if not self.healthy:
            raise OSError("connection refused")
        return True


class InMemoryStore:
    def __init__(self) -> None:
        self.database = FakeDatabase()
        self.companies: dict[str, dict[str, Any]] = {}
        self.invoices: dict[int, dict[str, Any]] = {}
        self.industries: dict[int, dict[str, Any]] = {}
        self.links: list[tuple[int, str]] = []
        self._invoice_seq = 0
        self._industry_seq = 0

    # seeding helpers

    def add_company(self, code: str, name: str, description: str = "") -> dict[str, Any]:
        row = {"code": code, "name": name, "description": description}
        self.companies[code] = row
        return dict(row)

    def add_invoice(
        self,
        comp_code: str,
        amt: float,
        *,
        paid: bool = False,
        add_date: date | None = None,
        paid_date: date | None = None,
    ) -> dict[str, Any]:
        self._invoice_seq += 1
        row = {
            "id": self._invoice_seq,
            "comp_code": comp_code,
            "amt": float(amt),
            "paid": paid,
            "add_date": add_date or date.today(),
            "paid_date": paid_date,
        }
        self.invoices[row["id"]] = row
        return dict(row)

    def add_industry(self, name: str) -> dict[str, Any]:
        self._industry_seq += 1
        row = {"id": self._industry_seq, "name": name}
        self.industries[row["id"]] = row
        return dict(row)

    def add_link(self, industry_id: int, company_code: str) -> None:
        if (industry_id, company_code) not in self.links:
            self.links.append((industry_id, company_code))

    # companies.repository

    async def list_companies(self, conn) -> list[dict[str, Any]]:
        return [{"code": c["code"], "name": c["name"]} for c in self.companies.values()]

    async def get_company(self, conn, code: str) -> dict[str, Any] | None:
        row = self.companies.get(code)
        return dict(row) if row is not None else None

    async def company_exists(self, conn, code: str) -> bool:
        return code in self.companies

    async def list_invoice_ids(self, conn, code: str) -> list[int]:
        return sorted(i["id"] for i in self.invoices.values() if i["comp_code"] == code)

    async def list_industry_names(self, conn, code: str) -> list[str]:
        ids = sorted(industry_id for (industry_id, c) in self.links if c == code)
        return [self.industries[i]["name"] for i in ids]

    async def insert_company(self, conn, *, code: str, name: str, description: str) -> dict[str, Any]:
        if code in self.companies:
            raise asyncpg.UniqueViolationError(f"duplicate key value violates unique constraint: {code}")
        return self.add_company(code, name, description)

    async def update_company(self, conn, code: str, *, name: str, description: str | None):
        row = self.companies.get(code)
        if row is None:
            return None
        row["name"] = name
        if description is not None:
            row["description"] = description
        return dict(row)

    async def delete_company(self, conn, code: str) -> dict[str, Any] | None:
        if self.companies.pop(code, None) is None:
            return None
        self.invoices = {k: v for k, v in self.invoices.items() if v["comp_code"] != code}
        self.links = [link for link in self.links if link[1] != code]
        return {"code": code}

    # invoices.repository

    async def list_invoices(self, conn) -> list[dict[str, Any]]:
        return [{"id": i["id"], "comp_code": i["comp_code"]} for i in self.invoices.values()]

    async def get_invoice(self, conn, invoice_id: int) -> dict[str, Any] | None:
        row = self.invoices.get(invoice_id)
        return dict(row) if row is not None else None

    async def lock_invoice(self, conn, invoice_id: int) -> dict[str, Any] | None:
        return await self.get_invoice(conn, invoice_id)

    async def insert_invoice(self, conn, *, comp_code: str, amt: float) -> dict[str, Any]:
        return self.add_invoice(comp_code, amt)

    async def update_invoice(self, conn, invoice_id: int, *, amt: float, paid: bool, paid_date):
        row = self.invoices.get(invoice_id)
        if row is None:
            return None
        row.update({"amt": float(amt), "paid": paid, "paid_date": paid_date})
        return dict(row)

    async def delete_invoice(self, conn, invoice_id: int) -> dict[str, Any] | None:
        if self.invoices.pop(invoice_id, None) is None:
            return None
        return {"id": invoice_id}

    # industries.repository

    async def list_industries_with_companies(self, conn) -> list[dict[str, Any]]:
        return [
            {**industry, "companies": await self.list_company_codes(conn, industry["id"])}
            for industry in self.industries.values()
        ]

    async def get_industry(self, conn, industry_id: int) -> dict[str, Any] | None:
        row = self.industries.get(industry_id)
        return dict(row) if row is not None else None

    async def list_company_codes(self, conn, industry_id: int) -> list[str]:
        return [c for (i, c) in self.links if i == industry_id]

    async def insert_industry(self, conn, *, name: str) -> dict[str, Any]:
        return self.add_industry(name)

    async def link_company(self, conn, *, industry_id: int, company_code: str) -> bool:
        if (industry_id, company_code) in self.links:
            return False
        self.links.append((industry_id, company_code))
        return True


_PATCHES = {
    company_repository: (
        "list_companies",
        "get_company",
        "company_exists",
        "list_invoice_ids",
        "list_industry_names",
        "insert_company",
        "update_company",
        "delete_company",
    ),
    invoice_repository: (
        "list_invoices",
        "get_invoice",
        "lock_invoice",
        "insert_invoice",
        "update_invoice",
        "delete_invoice",
    ),
    industry_repository: (
        "list_industries_with_companies",
        "get_industry",
        "list_company_codes",
        "insert_industry",
        "link_company",
    ),
}


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> InMemoryStore:
    memory = InMemoryStore()
    for module, names in _PATCHES.items():
        for name in names:
            monkeypatch.setattr(module, name, getattr(memory, name))
    return memory


@pytest.fixture
def seeded(store: InMemoryStore) -> dict[str, Any]:
    """
    One company with one invoice, a second bare company, and one industry
    linked to the first company.
    """
    company = store.add_company("TestCode", "TestName", "Test description here")
    store.add_company("TestCode2", "TestName2", "Test description again")
    invoice = store.add_invoice("TestCode", 300)
    industry = store.add_industry("TestIndustry")
    store.add_link(industry["id"], "TestCode")
    return {"company": company, "invoice": invoice, "industry": industry}


@pytest_asyncio.fixture
async def client(store: InMemoryStore):
    fastapi_app.dependency_overrides[db.get_database] = lambda: store.database

    # Unhandled errors must come back as 500 responses, not re-raise into the test.
    transport = ASGITransport(app=fastapi_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    fastapi_app.dependency_overrides.clear()
