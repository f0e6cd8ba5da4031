# =============================================================================
# app/routers/financial.py - Financial Endpoints
# =============================================================================
# Cost preview for the creation form, reports, CSV export and the
# dashboard counters.
# =============================================================================

from datetime import date
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from app.auth import get_current_user
from app.dependencies import ReportServiceDep
from core.models.financial import (
    CostModel,
    DashboardMetrics,
    FinancialBreakdown,
    FinancialReport,
    MonthlyFigures,
)
from core.models.package import DEFAULT_VIDEO_COUNT, PackageType
from core.models.user import Requester
from core.services.financial_calculator import (
    calculate_financials,
    calculate_with_cost_model,
)

router = APIRouter()


class FinancialPreviewRequest(BaseModel):
    """
    Values typed into the creation form.

    Example:
        {"total_value": "1000", "type": "package"}
    """
    total_value: Decimal | None = None
    type: PackageType = PackageType.PACKAGE
    video_count: int | None = Field(default=None, ge=0)
    cost_model: CostModel | None = None


@router.post("/preview", response_model=FinancialBreakdown)
async def preview_financials(
    request: FinancialPreviewRequest,
    user: Requester = Depends(get_current_user),
):
    """
    Calculate the breakdown without creating anything.

    Loss-making contracts come back with is_loss=true.
    """
    if request.cost_model is not None:
        video_count = (
            request.video_count
            if request.video_count is not None
            else DEFAULT_VIDEO_COUNT[request.type]
        )
        return calculate_with_cost_model(request.total_value, request.cost_model, video_count)
    return calculate_financials(request.total_value, request.type)


@router.get("/report", response_model=FinancialReport)
async def get_report(
    service: ReportServiceDep,
    user: Requester = Depends(get_current_user),
    start: Annotated[date | None, Query(description="First day (inclusive)")] = None,
    end: Annotated[date | None, Query(description="Last day (inclusive)")] = None,
    client_id: Annotated[list[str] | None, Query(description="Filter by client")] = None,
):
    """Totals over packages and posts. Admin and financial only."""
    return service.report(user, start=start, end=end, client_ids=client_id)


@router.get("/report/monthly", response_model=list[MonthlyFigures])
async def get_monthly_report(
    service: ReportServiceDep,
    user: Requester = Depends(get_current_user),
    start: Annotated[date | None, Query()] = None,
    end: Annotated[date | None, Query()] = None,
    client_id: Annotated[list[str] | None, Query()] = None,
):
    """Revenue, expenses and profit per month. Admin and financial only."""
    return service.monthly(user, start=start, end=end, client_ids=client_id)


@router.get("/export")
async def export_report(
    service: ReportServiceDep,
    user: Requester = Depends(get_current_user),
    start: Annotated[date | None, Query()] = None,
    end: Annotated[date | None, Query()] = None,
    client_id: Annotated[list[str] | None, Query()] = None,
):
    """Download the package ledger as CSV. Admin and financial only."""
    content = service.export(user, start=start, end=end, client_ids=client_id)
    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="relatorio_financeiro.csv"'},
    )


@router.get("/dashboard", response_model=DashboardMetrics)
async def get_dashboard(
    service: ReportServiceDep,
    user: Requester = Depends(get_current_user),
):
    """Dashboard counters. Revenue is hidden from non-financial roles."""
    return service.dashboard(user)
