"""
Invoice API endpoints (staff).
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.back_office import InvoiceCreate, InvoiceRead, InvoiceUpdate
from api.services.back_office_service import InvoiceService
from core.database import get_session
from core.dependencies import Principal, require_staff

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[InvoiceRead])
async def list_invoices(
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """All invoices, latest invoice date first."""
    try:
        return await InvoiceService.list_invoices(db)
    except Exception as e:
        logger.error(f"Error fetching invoices: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch invoices",
        )


@router.post("", response_model=InvoiceRead)
async def create_invoice(
    invoice_data: InvoiceCreate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await InvoiceService.create_invoice(db, invoice_data)
    except Exception as e:
        logger.error(f"Error creating invoice: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to create invoice",
        )


@router.put("/{invoice_id}", response_model=Optional[InvoiceRead])
async def update_invoice(
    invoice_id: int,
    invoice_data: InvoiceUpdate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await InvoiceService.update_invoice(db, invoice_id, invoice_data)
    except Exception as e:
        logger.error(f"Error updating invoice {invoice_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to update invoice",
        )


@router.delete("/{invoice_id}")
async def delete_invoice(
    invoice_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return {"success": await InvoiceService.delete_invoice(db, invoice_id)}
    except Exception as e:
        logger.error(f"Error deleting invoice {invoice_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete invoice",
        )
