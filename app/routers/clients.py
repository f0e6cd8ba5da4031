# =============================================================================
# app/routers/clients.py - Client CRUD Endpoints
# =============================================================================
# Handles client registration and management.
# All endpoints require authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.auth import get_current_user
from app.dependencies import ClientServiceDep
from core.models.client import Client, ClientCreate, ClientUpdate
from core.models.package import Package
from core.models.user import Requester
from lib.utils import format_amount

router = APIRouter()


@router.post("", response_model=Client, status_code=status.HTTP_201_CREATED)
async def create_client(
    request: ClientCreate,
    service: ClientServiceDep,
    user: Requester = Depends(get_current_user),
):
    """Register a new client."""
    return service.create_client(request)


@router.get("", response_model=list[Client])
async def list_clients(
    service: ClientServiceDep,
    user: Requester = Depends(get_current_user),
):
    """List every client, alphabetically."""
    return service.list_clients()


@router.get("/{client_id}", response_model=Client)
async def get_client(
    client_id: Annotated[str, Path(description="Client ID")],
    service: ClientServiceDep,
    user: Requester = Depends(get_current_user),
):
    return service.get_client(client_id)


@router.patch("/{client_id}", response_model=Client)
async def update_client(
    client_id: Annotated[str, Path(description="Client ID")],
    request: ClientUpdate,
    service: ClientServiceDep,
    user: Requester = Depends(get_current_user),
):
    """
    Update a client's name, agency or frequent flag.

    Packages keep the client name they were created with.
    """
    return service.update_client(client_id, request)


@router.delete("/{client_id}")
async def delete_client(
    client_id: Annotated[str, Path(description="Client ID")],
    service: ClientServiceDep,
    user: Requester = Depends(get_current_user),
):
    """Delete a client. Admin only."""
    service.delete_client(client_id, user)
    return {
        "client_id": client_id,
        "message": "Client deleted successfully",
    }


@router.get("/{client_id}/packages", response_model=list[Package])
async def list_client_packages(
    client_id: Annotated[str, Path(description="Client ID")],
    service: ClientServiceDep,
    user: Requester = Depends(get_current_user),
):
    """Packages and posts bought by the client, newest first."""
    return service.client_packages(client_id)


@router.get("/{client_id}/revenue")
async def get_client_revenue(
    client_id: Annotated[str, Path(description="Client ID")],
    service: ClientServiceDep,
    user: Requester = Depends(get_current_user),
):
    """Total contract value of the client's packages and posts."""
    revenue = service.client_revenue(client_id)
    return {
        "client_id": client_id,
        "revenue": format_amount(revenue),
    }
