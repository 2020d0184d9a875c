"""
CRUD for the back-office records: inventory, invoices and web leads.
"""
from datetime import datetime
from typing import List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from crud.base_repository import BaseCRUD
from db import InventoryItem, Invoice, WebLead


class InventoryCRUD(BaseCRUD[InventoryItem]):
    model = InventoryItem
    default_order = (InventoryItem.id,)


class InvoiceCRUD(BaseCRUD[Invoice]):
    model = Invoice
    default_order = (Invoice.invoice_date.desc(), Invoice.id.desc())


class WebLeadCRUD(BaseCRUD[WebLead]):
    model = WebLead
    default_order = (WebLead.created_at.desc(), WebLead.id.desc())

    @classmethod
    async def count_since(cls, db: AsyncSession, since: datetime) -> int:
        """Count leads captured at or after ``since``."""
        stmt = select(func.count(WebLead.id)).where(WebLead.created_at >= since)
        result = await db.execute(stmt)
        return result.scalar() or 0

    @classmethod
    async def find_since(cls, db: AsyncSession, since: datetime) -> List[WebLead]:
        stmt = (
            select(WebLead)
            .where(WebLead.created_at >= since)
            .order_by(*cls.default_order)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())
