"""
Integration tests for the back office.

Tests:
- Client, inventory and invoice management
- Public lead capture and staff-only lead handling
- Lead conversion (new client or existing email)
- Dashboard counters computed concurrently
"""

from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from app import create_app
from core.database import get_session, get_session_factory
from core.security import create_staff_token
from db import utc_now
from db.models import Client, Invoice, WebLead
from tests.factories import ClientFactory, ServiceRequestFactory, UserFactory


class TestClients:
    """Tests for /api/clients."""

    @pytest.mark.asyncio
    async def test_client_crud(self, client, staff_headers):
        created = await client.post(
            "/api/clients",
            headers=staff_headers,
            json={"name": "Nour Farouk", "email": "nour@example.com", "phone": "5550199"},
        )
        assert created.status_code == 200
        client_id = created.json()["id"]
        assert "passwordHash" not in created.json()

        updated = await client.put(
            f"/api/clients/{client_id}",
            headers=staff_headers,
            json={"address": "12 Nile St"},
        )
        assert updated.json()["address"] == "12 Nile St"
        assert updated.json()["name"] == "Nour Farouk"

        listed = await client.get("/api/clients", headers=staff_headers)
        assert client_id in [c["id"] for c in listed.json()]

        deleted = await client.delete(f"/api/clients/{client_id}", headers=staff_headers)
        assert deleted.status_code == 200

    @pytest.mark.asyncio
    async def test_update_missing_client_is_null(self, client, staff_headers):
        response = await client.put(
            "/api/clients/9999", headers=staff_headers, json={"name": "Ghost"}
        )
        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.asyncio
    async def test_requires_staff(self, client):
        assert (await client.get("/api/clients")).status_code == 401


class TestInventoryAndInvoices:
    """Tests for /api/inventory and /api/invoices."""

    @pytest.mark.asyncio
    async def test_inventory_item(self, client, staff_headers):
        created = await client.post(
            "/api/inventory",
            headers=staff_headers,
            json={"itemName": "SSD 512GB", "quantity": 4},
        )
        assert created.status_code == 200
        item_id = created.json()["id"]

        updated = await client.put(
            f"/api/inventory/{item_id}", headers=staff_headers, json={"quantity": 3}
        )
        assert updated.json()["quantity"] == 3
        assert updated.json()["itemName"] == "SSD 512GB"

    @pytest.mark.asyncio
    async def test_negative_quantity_rejected(self, client, staff_headers):
        response = await client.post(
            "/api/inventory",
            headers=staff_headers,
            json={"itemName": "Cable", "quantity": -1},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_invoice_defaults_unpaid(self, client, staff_headers):
        created = await client.post(
            "/api/invoices",
            headers=staff_headers,
            json={"amount": 120.5, "invoiceDate": "2024-03-01"},
        )
        assert created.status_code == 200
        assert created.json()["status"] == "unpaid"
        assert created.json()["amount"] == 120.5

        paid = await client.put(
            f"/api/invoices/{created.json()['id']}",
            headers=staff_headers,
            json={"status": "paid"},
        )
        assert paid.json()["status"] == "paid"


class TestLeads:
    """Tests for /api/leads."""

    @pytest.mark.asyncio
    async def test_public_capture_staff_listing(self, client, staff_headers):
        captured = await client.post(
            "/api/leads",
            json={"name": "Youssef", "email": "youssef@example.com", "message": "Quote?"},
        )
        assert captured.status_code == 200

        assert (await client.get("/api/leads")).status_code == 401

        listed = await client.get("/api/leads", headers=staff_headers)
        assert [lead["email"] for lead in listed.json()] == ["youssef@example.com"]

    @pytest.mark.asyncio
    async def test_convert_creates_client(self, client, db_session, staff_headers):
        lead = WebLead(name="Fatma", email="Fatma@Example.com", message="Fix my PC")
        db_session.add(lead)
        await db_session.commit()

        response = await client.post(
            f"/api/leads/{lead.id}/convert", headers=staff_headers
        )

        assert response.status_code == 200
        converted = response.json()
        assert converted["email"] == "fatma@example.com"
        assert converted["notes"] == "Fix my PC"

        remaining = await client.get("/api/leads", headers=staff_headers)
        assert remaining.json() == []

    @pytest.mark.asyncio
    async def test_convert_reuses_existing_client(self, client, db_session, staff_headers):
        existing = ClientFactory.create(email="known@example.com")
        db_session.add(existing)
        lead = WebLead(name="Known", email="known@example.com")
        db_session.add(lead)
        await db_session.commit()

        response = await client.post(
            f"/api/leads/{lead.id}/convert", headers=staff_headers
        )

        assert response.json()["id"] == existing.id
        clients = (await db_session.execute(select(Client))).scalars().all()
        assert len(clients) == 1

    @pytest.mark.asyncio
    async def test_convert_missing_lead_is_null(self, client, staff_headers):
        response = await client.post("/api/leads/321/convert", headers=staff_headers)
        assert response.status_code == 200
        assert response.json() is None


# ============================================================================
# Dashboard
# ============================================================================

@pytest_asyncio.fixture
async def file_session_factory(tmp_path):
    """File-backed database so concurrent counters get their own connections."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'dashboard.db'}", poolclass=NullPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


class TestDashboard:
    """Tests for GET /api/dashboard/stats."""

    @pytest.mark.asyncio
    async def test_stats(self, file_session_factory):
        async with file_session_factory() as db:
            staff = UserFactory.create()
            first, second = ClientFactory.create(), ClientFactory.create()
            db.add_all([staff, first, second])
            await db.commit()

            db.add_all([
                ServiceRequestFactory.create(client_id=first.id, status="pending"),
                ServiceRequestFactory.create(client_id=first.id, status="in-progress"),
                ServiceRequestFactory.create(client_id=second.id, status="completed"),
                Invoice(client_id=first.id, amount=10, status="unpaid"),
                Invoice(client_id=first.id, amount=20, status="paid"),
                WebLead(name="Fresh", email="fresh@example.com"),
                WebLead(
                    name="Stale",
                    email="stale@example.com",
                    created_at=utc_now() - timedelta(days=30),
                ),
            ])
            await db.commit()
            token = create_staff_token(staff.id, staff.username)

        app = create_app()

        async def override_get_session():
            async with file_session_factory() as session:
                yield session

        app.dependency_overrides[get_session] = override_get_session
        app.dependency_overrides[get_session_factory] = lambda: file_session_factory

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as http_client:
            response = await http_client.get(
                "/api/dashboard/stats", headers={"Authorization": f"Bearer {token}"}
            )

        assert response.status_code == 200
        assert response.json() == {
            "activeClients": 2,
            "openRequests": 2,
            "pendingInvoices": 1,
            "newLeads": 1,
        }
