"""
Inventory API endpoints (staff).
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.back_office import (
    InventoryItemCreate,
    InventoryItemRead,
    InventoryItemUpdate,
)
from api.services.back_office_service import InventoryService
from core.database import get_session
from core.dependencies import Principal, require_staff

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[InventoryItemRead])
async def list_inventory(
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await InventoryService.list_items(db)
    except Exception as e:
        logger.error(f"Error fetching inventory: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch inventory",
        )


@router.post("", response_model=InventoryItemRead)
async def create_inventory_item(
    item_data: InventoryItemCreate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await InventoryService.create_item(db, item_data)
    except Exception as e:
        logger.error(f"Error creating inventory item: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to create inventory item",
        )


@router.put("/{item_id}", response_model=Optional[InventoryItemRead])
async def update_inventory_item(
    item_id: int,
    item_data: InventoryItemUpdate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await InventoryService.update_item(db, item_id, item_data)
    except Exception as e:
        logger.error(f"Error updating inventory item {item_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to update inventory item",
        )


@router.delete("/{item_id}")
async def delete_inventory_item(
    item_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return {"success": await InventoryService.delete_item(db, item_id)}
    except Exception as e:
        logger.error(f"Error deleting inventory item {item_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete inventory item",
        )
