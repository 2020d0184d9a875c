"""
Integration tests for the service request to ticket conversation flow.

Tests:
- A client submits a service request; staff see it pending
- Staff open the request's ticket (get-or-create)
- Staff and client post messages; sender type follows the credential
- Message endpoints require a credential and a known ticket
"""

import pytest


@pytest.fixture
def client_submits(client):
    async def _submit(service_type="Laptop repair", description="Will not boot"):
        response = await client.post(
            "/api/client/service-requests",
            json={"serviceType": service_type, "description": description},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _submit


class TestServiceRequestToTicket:
    """End-to-end request, ticket and message flow."""

    @pytest.mark.asyncio
    async def test_full_conversation(
        self, client, portal_client, login_as, staff_headers, client_submits
    ):
        await login_as(portal_client.email)

        submitted = await client_submits()
        assert submitted["status"] == "pending"
        assert submitted["clientId"] == portal_client.id

        listed = await client.get("/api/service-requests", headers=staff_headers)
        assert listed.status_code == 200
        pending = [r for r in listed.json() if r["id"] == submitted["id"]]
        assert pending and pending[0]["status"] == "pending"

        opened = await client.post(
            f"/api/service-requests/{submitted['id']}/ticket", headers=staff_headers
        )
        assert opened.status_code == 200
        ticket = opened.json()
        assert ticket["status"] == "open"
        assert ticket["priority"] == "medium"
        assert ticket["serviceRequestId"] == submitted["id"]
        assert ticket["title"] == "Laptop repair"

        reopened = await client.post(
            f"/api/service-requests/{submitted['id']}/ticket", headers=staff_headers
        )
        assert reopened.json()["id"] == ticket["id"]

        staff_message = await client.post(
            f"/api/tickets/{ticket['id']}/messages",
            headers=staff_headers,
            json={"message": "We will look at it today", "senderType": "client"},
        )
        assert staff_message.status_code == 200
        assert staff_message.json()["senderType"] == "tech"

        client_message = await client.post(
            f"/api/client/tickets/{ticket['id']}/messages",
            json={"message": "Thank you", "senderType": "tech"},
        )
        assert client_message.status_code == 200
        assert client_message.json()["senderType"] == "client"

        shared_route = await client.post(
            f"/api/tickets/{ticket['id']}/messages",
            json={"message": "It also beeps"},
        )
        assert shared_route.status_code == 200
        assert shared_route.json()["senderType"] == "client"

        as_client = await client.get(f"/api/client/tickets/{ticket['id']}/messages")
        as_staff = await client.get(
            f"/api/tickets/{ticket['id']}/messages", headers=staff_headers
        )
        assert as_client.status_code == 200
        assert as_client.json() == as_staff.json()
        assert [m["message"] for m in as_client.json()] == [
            "It also beeps",
            "Thank you",
            "We will look at it today",
        ]

    @pytest.mark.asyncio
    async def test_client_only_sees_own_requests(
        self, client, db_session, portal_client, login_as, client_submits
    ):
        from tests.factories import ClientFactory, ServiceRequestFactory

        other = ClientFactory.create()
        db_session.add(other)
        await db_session.commit()
        db_session.add(ServiceRequestFactory.create(client_id=other.id))
        await db_session.commit()

        await login_as(portal_client.email)
        mine = await client_submits(service_type="Printer setup")

        response = await client.get("/api/client/service-requests")

        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [mine["id"]]

    @pytest.mark.asyncio
    async def test_ticket_for_unknown_request_is_null(self, client, staff_headers):
        response = await client.post(
            "/api/service-requests/9999/ticket", headers=staff_headers
        )

        assert response.status_code == 200
        assert response.json() is None


class TestTicketEndpoints:
    """Tests for the staff ticket routes."""

    @pytest.mark.asyncio
    async def test_create_and_patch(self, client, staff_headers):
        created = await client.post(
            "/api/tickets", headers=staff_headers, json={"title": "Router reset"}
        )
        assert created.status_code == 200
        ticket = created.json()
        assert ticket["status"] == "open"
        assert ticket["clientNotifications"] is True
        assert ticket["emailNotifications"] is False
        assert ticket["createdAt"].endswith("Z")

        patched = await client.patch(
            f"/api/tickets/{ticket['id']}",
            headers=staff_headers,
            json={"status": "resolved"},
        )
        assert patched.status_code == 200
        assert patched.json()["status"] == "resolved"
        assert patched.json()["title"] == "Router reset"

    @pytest.mark.asyncio
    async def test_missing_ticket_is_null(self, client, staff_headers):
        response = await client.get("/api/tickets/12345", headers=staff_headers)

        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.asyncio
    async def test_invalid_status_rejected(self, client, staff_headers):
        created = await client.post(
            "/api/tickets", headers=staff_headers, json={"title": "Disk alert"}
        )

        response = await client.patch(
            f"/api/tickets/{created.json()['id']}",
            headers=staff_headers,
            json={"status": "archived"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_null_required_fields_ignored(self, client, staff_headers):
        created = await client.post(
            "/api/tickets",
            headers=staff_headers,
            json={"title": "Disk alert", "priority": "urgent"},
        )

        response = await client.patch(
            f"/api/tickets/{created.json()['id']}",
            headers=staff_headers,
            json={
                "status": None,
                "priority": None,
                "clientNotifications": None,
                "emailNotifications": None,
            },
        )

        assert response.status_code == 200, response.text
        body = response.json()
        assert body["status"] == "open"
        assert body["priority"] == "urgent"
        assert body["clientNotifications"] is True
        assert body["emailNotifications"] is False

    @pytest.mark.asyncio
    async def test_duplicate_ticket_for_request(
        self, client, db_session, staff_headers
    ):
        from tests.factories import ServiceRequestFactory

        request = ServiceRequestFactory.create()
        db_session.add(request)
        await db_session.commit()

        payload = {"title": "Dup", "serviceRequestId": request.id}
        first = await client.post("/api/tickets", headers=staff_headers, json=payload)
        second = await client.post("/api/tickets", headers=staff_headers, json=payload)

        assert first.status_code == 200
        assert second.status_code == 400

    @pytest.mark.asyncio
    async def test_management_requires_staff(self, client, portal_client, login_as):
        await login_as(portal_client.email)

        response = await client.get("/api/tickets")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_messages_require_credentials(self, client, staff_headers):
        created = await client.post(
            "/api/tickets", headers=staff_headers, json={"title": "Phone sync"}
        )

        response = await client.post(
            f"/api/tickets/{created.json()['id']}/messages",
            json={"message": "hello"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_message_to_unknown_ticket(self, client, staff_headers):
        response = await client.post(
            "/api/tickets/777/messages",
            headers=staff_headers,
            json={"message": "anyone?"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid ticket"

    @pytest.mark.asyncio
    async def test_empty_message_rejected(self, client, staff_headers):
        created = await client.post(
            "/api/tickets", headers=staff_headers, json={"title": "Blank"}
        )

        response = await client.post(
            f"/api/tickets/{created.json()['id']}/messages",
            headers=staff_headers,
            json={"message": ""},
        )

        assert response.status_code == 400
