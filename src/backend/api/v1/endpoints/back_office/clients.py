"""
Client API endpoints (staff).
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.client import ClientCreate, ClientRead, ClientUpdate
from api.services.client_service import ClientService
from core.database import get_session
from core.dependencies import Principal, require_staff

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[ClientRead])
async def list_clients(
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """All clients, newest first."""
    try:
        return await ClientService.list_clients(db)
    except Exception as e:
        logger.error(f"Error fetching clients: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch clients",
        )


@router.post("", response_model=ClientRead)
async def create_client(
    client_data: ClientCreate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await ClientService.create_client(db, client_data)
    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )
    except Exception as e:
        logger.error(f"Error creating client: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to create client",
        )


@router.put("/{client_id}", response_model=Optional[ClientRead])
async def update_client(
    client_id: int,
    update_data: ClientUpdate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """Update a client; null when it does not exist."""
    try:
        return await ClientService.update_client(db, client_id, update_data)
    except Exception as e:
        logger.error(f"Error updating client {client_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to update client",
        )


@router.delete("/{client_id}")
async def delete_client(
    client_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        await ClientService.delete_client(db, client_id)
        return {"success": True}
    except Exception as e:
        logger.error(f"Error deleting client {client_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete client",
        )
