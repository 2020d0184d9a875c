"""
Schemas for inventory, invoices, web leads and the dashboard summary.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, Field

from core.schema_base import HTTPSchemaModel
from db.enums import InvoiceStatus


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------


class InventoryItemCreate(HTTPSchemaModel):
    item_name: str = Field(..., min_length=1, max_length=100)
    quantity: int = Field(0, ge=0)
    notes: Optional[str] = None
    last_used: Optional[datetime] = None


class InventoryItemUpdate(HTTPSchemaModel):
    item_name: Optional[str] = Field(None, min_length=1, max_length=100)
    quantity: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    last_used: Optional[datetime] = None


class InventoryItemRead(HTTPSchemaModel):
    id: int
    item_name: Optional[str] = None
    quantity: Optional[int] = None
    notes: Optional[str] = None
    last_used: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Invoices
# ---------------------------------------------------------------------------


class InvoiceCreate(HTTPSchemaModel):
    client_id: Optional[int] = None
    amount: Decimal = Field(..., ge=0)
    status: InvoiceStatus = InvoiceStatus.UNPAID
    invoice_date: Optional[date] = None
    pdf_url: Optional[str] = None


class InvoiceUpdate(HTTPSchemaModel):
    client_id: Optional[int] = None
    amount: Optional[Decimal] = Field(None, ge=0)
    status: Optional[InvoiceStatus] = None
    invoice_date: Optional[date] = None
    pdf_url: Optional[str] = None


class InvoiceRead(HTTPSchemaModel):
    id: int
    client_id: Optional[int] = None
    amount: Optional[Decimal] = None
    status: str
    invoice_date: Optional[date] = None
    pdf_url: Optional[str] = None


# ---------------------------------------------------------------------------
# Web leads
# ---------------------------------------------------------------------------


class WebLeadCreate(HTTPSchemaModel):
    """Public contact form submission."""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    message: Optional[str] = None
    source: Optional[str] = Field(None, max_length=100)


class WebLeadRead(HTTPSchemaModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None
    source: Optional[str] = None
    created_at: datetime


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


class DashboardStats(HTTPSchemaModel):
    active_clients: int
    open_requests: int
    pending_invoices: int
    new_leads: int
