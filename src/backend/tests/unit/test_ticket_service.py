"""
Unit tests for the ticket service.

Tests:
- Ticket defaults on creation
- One ticket per service request (get-or-create is idempotent)
- Get-or-create returns the concurrent winner after losing the insert race
- Duplicate tickets for a service request are rejected
- Message log ordering and sender type handling
- Update stamps updated_at and allows any status transition
- Explicit nulls never overwrite required ticket fields
"""

import pytest
import pytest_asyncio
from sqlalchemy.exc import IntegrityError

from api.schemas.ticket import TicketCreate, TicketMessageCreate, TicketUpdate
from api.services.ticket_service import TicketService
from crud import TicketCRUD
from db import SenderType, Ticket
from tests.factories import ClientFactory, ServiceRequestFactory


@pytest_asyncio.fixture
async def service_request(db_session):
    client = ClientFactory.create()
    db_session.add(client)
    await db_session.commit()

    request = ServiceRequestFactory.create(
        client_id=client.id, assigned_to="omar.tech"
    )
    db_session.add(request)
    await db_session.commit()
    await db_session.refresh(request)
    return request


class TestTicketCreation:
    """Tests for creating tickets."""

    @pytest.mark.asyncio
    async def test_defaults(self, db_session):
        ticket = await TicketService.create_ticket(
            db_session, TicketCreate(title="Printer jam")
        )

        assert ticket.id is not None
        assert ticket.status == "open"
        assert ticket.priority == "medium"
        assert ticket.client_notifications is True
        assert ticket.email_notifications is False
        assert ticket.created_at is not None

    @pytest.mark.asyncio
    async def test_get_or_create_is_idempotent(self, db_session, service_request):
        first = await TicketService.get_or_create_ticket_for_service_request(
            db_session, service_request.id
        )
        second = await TicketService.get_or_create_ticket_for_service_request(
            db_session, service_request.id
        )

        assert first.id == second.id
        assert first.title == service_request.service_type
        assert first.description == service_request.description
        assert first.client_id == service_request.client_id
        assert first.assigned_to == "omar.tech"

        tickets = await TicketService.list_tickets_for_service_request(
            db_session, service_request.id
        )
        assert len(tickets) == 1

    @pytest.mark.asyncio
    async def test_get_or_create_returns_concurrent_winner(
        self, db_session, session_factory, service_request, monkeypatch
    ):
        request_id = service_request.id
        client_id = service_request.client_id
        lookup = TicketCRUD.find_by_service_request
        calls = []

        async def miss_then_lookup(cls, db, service_request_id):
            calls.append(service_request_id)
            if len(calls) == 1:
                # Another writer attaches its ticket after our first read.
                async with session_factory() as other:
                    other.add(
                        Ticket(
                            service_request_id=service_request_id,
                            client_id=client_id,
                            title="winner",
                        )
                    )
                    await other.commit()
                return None
            return await lookup(db, service_request_id)

        monkeypatch.setattr(
            TicketCRUD, "find_by_service_request", classmethod(miss_then_lookup)
        )

        ticket = await TicketService.get_or_create_ticket_for_service_request(
            db_session, request_id
        )

        assert ticket.title == "winner"
        assert calls == [request_id, request_id]

        monkeypatch.undo()
        tickets = await TicketService.list_tickets_for_service_request(
            db_session, request_id
        )
        assert [t.id for t in tickets] == [ticket.id]

    @pytest.mark.asyncio
    async def test_get_or_create_unknown_request(self, db_session):
        ticket = await TicketService.get_or_create_ticket_for_service_request(
            db_session, 4242
        )
        assert ticket is None

    @pytest.mark.asyncio
    async def test_second_ticket_for_request_rejected(self, db_session, service_request):
        await TicketService.create_ticket(
            db_session,
            TicketCreate(title="First", service_request_id=service_request.id),
        )

        with pytest.raises(IntegrityError):
            await TicketService.create_ticket(
                db_session,
                TicketCreate(title="Second", service_request_id=service_request.id),
            )

        tickets = await TicketService.list_tickets_for_service_request(
            db_session, service_request.id
        )
        assert [t.title for t in tickets] == ["First"]


class TestTicketUpdate:
    """Tests for updating tickets."""

    @pytest.mark.asyncio
    async def test_closed_ticket_can_reopen(self, db_session):
        ticket = await TicketService.create_ticket(
            db_session, TicketCreate(title="Slow network")
        )
        created_at = ticket.created_at

        closed = await TicketService.update_ticket(
            db_session, ticket.id, TicketUpdate(status="closed")
        )
        assert closed.status == "closed"

        reopened = await TicketService.update_ticket(
            db_session, ticket.id, TicketUpdate(status="open", priority="urgent")
        )
        assert reopened.status == "open"
        assert reopened.priority == "urgent"
        assert reopened.title == "Slow network"
        assert reopened.created_at == created_at
        assert reopened.updated_at >= created_at

    @pytest.mark.asyncio
    async def test_explicit_nulls_keep_required_fields(self, db_session):
        ticket = await TicketService.create_ticket(
            db_session, TicketCreate(title="Label printer", priority="high")
        )

        updated = await TicketService.update_ticket(
            db_session,
            ticket.id,
            TicketUpdate(
                status=None,
                priority=None,
                client_notifications=None,
                email_notifications=None,
                assigned_to="omar.tech",
            ),
        )

        assert updated.status == "open"
        assert updated.priority == "high"
        assert updated.client_notifications is True
        assert updated.email_notifications is False
        assert updated.assigned_to == "omar.tech"

    @pytest.mark.asyncio
    async def test_update_unknown_ticket(self, db_session):
        assert await TicketService.update_ticket(
            db_session, 999, TicketUpdate(status="closed")
        ) is None


class TestTicketMessages:
    """Tests for the append-only message log."""

    @pytest.mark.asyncio
    async def test_messages_newest_first(self, db_session):
        ticket = await TicketService.create_ticket(
            db_session, TicketCreate(title="Backup failing")
        )

        await TicketService.append_message(
            db_session,
            ticket.id,
            SenderType.TECH,
            TicketMessageCreate(message="Checking the drive"),
        )
        await TicketService.append_message(
            db_session,
            ticket.id,
            SenderType.CLIENT,
            TicketMessageCreate(message="Thanks", is_internal=False),
        )

        messages = await TicketService.list_messages(db_session, ticket.id)

        assert [m.message for m in messages] == ["Thanks", "Checking the drive"]
        assert [m.sender_type for m in messages] == ["client", "tech"]
        assert all(m.message_type == "chat" for m in messages)
        assert all(m.email_sent is False for m in messages)

    @pytest.mark.asyncio
    async def test_internal_messages_are_listed(self, db_session):
        ticket = await TicketService.create_ticket(
            db_session, TicketCreate(title="Server room access")
        )
        await TicketService.append_message(
            db_session,
            ticket.id,
            SenderType.TECH,
            TicketMessageCreate(message="Needs manager sign-off", is_internal=True),
        )

        messages = await TicketService.list_messages(db_session, ticket.id)

        assert len(messages) == 1
        assert messages[0].is_internal is True

    @pytest.mark.asyncio
    async def test_append_leaves_ticket_untouched(self, db_session):
        ticket = await TicketService.create_ticket(
            db_session, TicketCreate(title="VPN drops")
        )
        updated_at = ticket.updated_at

        await TicketService.append_message(
            db_session,
            ticket.id,
            SenderType.CLIENT,
            TicketMessageCreate(message="Still dropping"),
        )

        reloaded = await TicketService.get_ticket(db_session, ticket.id)
        assert reloaded.status == "open"
        assert reloaded.updated_at == updated_at

    @pytest.mark.asyncio
    async def test_delete_ticket_removes_messages(self, db_session):
        ticket = await TicketService.create_ticket(
            db_session, TicketCreate(title="Old ticket")
        )
        await TicketService.append_message(
            db_session,
            ticket.id,
            SenderType.TECH,
            TicketMessageCreate(message="Closing"),
        )

        assert await TicketService.delete_ticket(db_session, ticket.id) is True
        assert await TicketService.get_ticket(db_session, ticket.id) is None
        assert await TicketService.list_messages(db_session, ticket.id) == []
        assert await TicketService.delete_ticket(db_session, ticket.id) is False
