# =============================================================================
# app/routers/packages.py - Package and Post Endpoints
# =============================================================================
# Creation, listing, cancellation, videos and the payment checklist.
# Posts are packages with type=post and share these endpoints.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import get_current_user
from app.dependencies import PackageServiceDep
from core.models.package import (
    Package,
    PackageCreate,
    PackageStatus,
    PackageType,
    PaymentSummary,
    PaymentUpdateRequest,
)
from core.models.user import Requester
from core.models.video import Video

router = APIRouter()


@router.post("", response_model=Package, status_code=status.HTTP_201_CREATED)
async def create_package(
    request: PackageCreate,
    service: PackageServiceDep,
    user: Requester = Depends(get_current_user),
):
    """
    Create a package (5 videos) or a post (1 video by default).

    Commissions, costs and net profit are calculated from total_value.
    A negative net_profit is accepted and returned as is.
    """
    return service.create_package(request, user)


@router.get("", response_model=list[Package])
async def list_packages(
    service: PackageServiceDep,
    user: Requester = Depends(get_current_user),
    type: Annotated[PackageType | None, Query(description="Filter by type")] = None,
    status: Annotated[PackageStatus | None, Query(description="Filter by status")] = None,
    client_id: Annotated[str | None, Query(description="Filter by client")] = None,
):
    """List packages and posts, newest first."""
    return service.list_packages(type=type, status=status, client_id=client_id)


@router.get("/{package_id}", response_model=Package)
async def get_package(
    package_id: Annotated[str, Path(description="Package ID")],
    service: PackageServiceDep,
    user: Requester = Depends(get_current_user),
):
    return service.get_package(package_id)


@router.post("/{package_id}/cancel", response_model=Package)
async def cancel_package(
    package_id: Annotated[str, Path(description="Package ID")],
    service: PackageServiceDep,
    user: Requester = Depends(get_current_user),
):
    """Cancel an active package. Admin only."""
    return service.cancel_package(package_id, user)


@router.get("/{package_id}/videos", response_model=list[Video])
async def list_package_videos(
    package_id: Annotated[str, Path(description="Package ID")],
    service: PackageServiceDep,
    user: Requester = Depends(get_current_user),
):
    """Videos of the package ordered by video number."""
    return service.list_videos(package_id)


@router.get("/{package_id}/payments", response_model=PaymentSummary)
async def get_payment_summary(
    package_id: Annotated[str, Path(description="Package ID")],
    service: PackageServiceDep,
    user: Requester = Depends(get_current_user),
):
    """Receivables and payables of the package. Admin and financial only."""
    return service.payment_summary(package_id, user)


@router.patch("/{package_id}/payments", response_model=PaymentSummary)
async def update_payment_status(
    package_id: Annotated[str, Path(description="Package ID")],
    request: PaymentUpdateRequest,
    service: PackageServiceDep,
    user: Requester = Depends(get_current_user),
):
    """Tick or untick one payment entry. Admin and financial only."""
    service.update_payment_status(package_id, request.field, request.paid, user)
    return service.payment_summary(package_id, user)
