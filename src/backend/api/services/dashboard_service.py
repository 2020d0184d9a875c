"""
Dashboard service: headline counts for the back office.
"""
import asyncio
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from api.schemas.back_office import DashboardStats
from core.database import session_scope
from core.decorators import log_database_operation
from crud import ClientCRUD, InvoiceCRUD, ServiceRequestCRUD, WebLeadCRUD
from db import InvoiceStatus, ServiceRequestStatus, utc_now

logger = logging.getLogger(__name__)

NEW_LEAD_WINDOW = timedelta(days=7)
OPEN_REQUEST_STATUSES = (
    ServiceRequestStatus.PENDING.value,
    ServiceRequestStatus.IN_PROGRESS.value,
)


async def _count_clients(factory: Optional[async_sessionmaker]) -> int:
    async with session_scope(factory) as db:
        return await ClientCRUD.count(db)


async def _count_open_requests(factory: Optional[async_sessionmaker]) -> int:
    async with session_scope(factory) as db:
        return len(await ServiceRequestCRUD.find_by_statuses(db, OPEN_REQUEST_STATUSES))


async def _count_unpaid_invoices(factory: Optional[async_sessionmaker]) -> int:
    async with session_scope(factory) as db:
        return await InvoiceCRUD.count(db, filters={"status": InvoiceStatus.UNPAID.value})


async def _count_new_leads(factory: Optional[async_sessionmaker]) -> int:
    async with session_scope(factory) as db:
        return await WebLeadCRUD.count_since(db, utc_now() - NEW_LEAD_WINDOW)


class DashboardService:
    """Service for dashboard statistics."""

    @staticmethod
    @log_database_operation("dashboard stats", level="debug")
    async def get_stats(
        session_factory: Optional[async_sessionmaker] = None,
    ) -> DashboardStats:
        """
        Compute the four dashboard counters.

        The counts run concurrently, each on its own session, since an
        AsyncSession cannot be shared between concurrent tasks.

        Args:
            session_factory: Factory for the per-count sessions (defaults to
                the application's)
        """
        active_clients, open_requests, pending_invoices, new_leads = await asyncio.gather(
            _count_clients(session_factory),
            _count_open_requests(session_factory),
            _count_unpaid_invoices(session_factory),
            _count_new_leads(session_factory),
        )
        return DashboardStats(
            active_clients=active_clients,
            open_requests=open_requests,
            pending_invoices=pending_invoices,
            new_leads=new_leads,
        )
