"""
Back-office service: inventory, invoices and web leads.
"""
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.back_office import (
    InventoryItemCreate,
    InventoryItemUpdate,
    InvoiceCreate,
    InvoiceUpdate,
    WebLeadCreate,
)
from core.decorators import (
    critical_database_operation,
    log_database_operation,
    transactional_database_operation,
)
from crud import ClientCRUD, InventoryCRUD, InvoiceCRUD, WebLeadCRUD
from db import Client, InventoryItem, Invoice, WebLead

logger = logging.getLogger(__name__)


class InventoryService:
    """Service for the parts inventory."""

    @staticmethod
    @critical_database_operation("list_inventory")
    async def list_items(db: AsyncSession) -> List[InventoryItem]:
        return await InventoryCRUD.find_all(db)

    @staticmethod
    @transactional_database_operation("create_inventory_item")
    async def create_item(db: AsyncSession, data: InventoryItemCreate) -> InventoryItem:
        return await InventoryCRUD.create(db, obj_in=data.model_dump())

    @staticmethod
    @transactional_database_operation("update_inventory_item")
    async def update_item(
        db: AsyncSession, item_id: int, data: InventoryItemUpdate
    ) -> Optional[InventoryItem]:
        return await InventoryCRUD.update(
            db, id_value=item_id, obj_in=data.model_dump(exclude_unset=True)
        )

    @staticmethod
    @transactional_database_operation("delete_inventory_item")
    async def delete_item(db: AsyncSession, item_id: int) -> bool:
        return await InventoryCRUD.delete(db, id_value=item_id)


class InvoiceService:
    """Service for client invoices."""

    @staticmethod
    @critical_database_operation("list_invoices")
    async def list_invoices(db: AsyncSession) -> List[Invoice]:
        """All invoices, latest invoice date first."""
        return await InvoiceCRUD.find_all(db)

    @staticmethod
    @transactional_database_operation("create_invoice")
    @log_database_operation("invoice creation", level="debug")
    async def create_invoice(db: AsyncSession, data: InvoiceCreate) -> Invoice:
        return await InvoiceCRUD.create(db, obj_in=data.model_dump())

    @staticmethod
    @transactional_database_operation("update_invoice")
    async def update_invoice(
        db: AsyncSession, invoice_id: int, data: InvoiceUpdate
    ) -> Optional[Invoice]:
        values = data.model_dump(exclude_unset=True)
        if values.get("status", True) is None:
            del values["status"]
        return await InvoiceCRUD.update(db, id_value=invoice_id, obj_in=values)

    @staticmethod
    @transactional_database_operation("delete_invoice")
    async def delete_invoice(db: AsyncSession, invoice_id: int) -> bool:
        return await InvoiceCRUD.delete(db, id_value=invoice_id)


class LeadService:
    """Service for web leads captured by the public contact form."""

    @staticmethod
    @critical_database_operation("list_leads")
    async def list_leads(db: AsyncSession) -> List[WebLead]:
        """All leads, newest first."""
        return await WebLeadCRUD.find_all(db)

    @staticmethod
    @transactional_database_operation("create_lead")
    @log_database_operation("lead capture", level="info")
    async def create_lead(db: AsyncSession, data: WebLeadCreate) -> WebLead:
        return await WebLeadCRUD.create(db, obj_in=data.model_dump())

    @staticmethod
    @transactional_database_operation("delete_lead")
    async def delete_lead(db: AsyncSession, lead_id: int) -> bool:
        return await WebLeadCRUD.delete(db, id_value=lead_id)

    @staticmethod
    @transactional_database_operation("convert_lead")
    @log_database_operation("lead conversion", level="info")
    async def convert_lead(db: AsyncSession, lead_id: int) -> Optional[Client]:
        """
        Promote a lead to a client and remove the lead.

        When a client with the lead's email already exists, that client is
        returned and no duplicate is created.

        Returns:
            The client, or None if the lead does not exist
        """
        lead = await WebLeadCRUD.find_by_id(db, lead_id)
        if not lead:
            return None

        client = None
        if lead.email:
            client = await ClientCRUD.find_by_email(db, lead.email)

        if client is None:
            client = await ClientCRUD.create(
                db,
                obj_in={
                    "name": lead.name,
                    "email": lead.email.lower() if lead.email else None,
                    "notes": lead.message,
                },
            )
            logger.info(f"Lead {lead_id} converted to client {client.id}")
        else:
            logger.info(f"Lead {lead_id} matched existing client {client.id}")

        await WebLeadCRUD.delete(db, id_value=lead_id)
        return client
