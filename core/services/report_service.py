# =============================================================================
# core/services/report_service.py - Financial Reports
# =============================================================================
# Aggregates the stored cost fields of packages and posts into:
# - a period/client filtered report (totals and counts)
# - a month-by-month breakdown for charts
# - headline dashboard metrics
# - a CSV export of the package ledger
#
# Reports only read the amounts stored at creation time; nothing is
# recalculated. Sums stay in Decimal; only the CSV export is formatted to
# two decimal places.
# =============================================================================

from __future__ import annotations

import io
import logging
from datetime import date, datetime
from decimal import Decimal

import pandas as pd

from core.models.financial import DashboardMetrics, FinancialReport, MonthlyFigures
from core.models.package import Package, PackageStatus, PackageType
from core.models.user import Requester
from core.models.video import Video, VideoStatus
from core.repositories.base import PromoRepository
from core.services.permissions import FINANCIAL_ROLES, require_role
from lib.utils import format_amount, utc_now

logger = logging.getLogger(__name__)

AMOUNT_COLUMNS = [
    "total_value",
    "juninho_commission",
    "natalia_commission",
    "engagement_cost",
    "pro_labore",
    "net_profit",
]

LEDGER_COLUMNS = ["id", "created_at", "client_id", "client_name", "type", "status"] + AMOUNT_COLUMNS

ALL_PERIODS_LABEL = "Todos os períodos"


# =============================================================================
# Frame Helpers
# =============================================================================

def packages_frame(packages: list[Package]) -> pd.DataFrame:
    """
    Build a DataFrame with one row per package.

    Amount columns hold Decimal objects (object dtype); created_at is
    converted to UTC timestamps so period filters compare correctly.
    """
    df = pd.DataFrame(
        [p.model_dump(include=set(LEDGER_COLUMNS)) for p in packages],
        columns=LEDGER_COLUMNS,
    )
    df["created_at"] = pd.to_datetime(df["created_at"], utc=True)
    df["type"] = df["type"].map(lambda t: PackageType(t).value)
    df["status"] = df["status"].map(lambda s: PackageStatus(s).value)
    return df


def _decimal_sum(series: pd.Series) -> Decimal:
    # Python sum keeps Decimal precision; pandas would fall back to float
    return sum(series, Decimal("0"))


def _utc_timestamp(value: date | datetime) -> pd.Timestamp:
    ts = pd.Timestamp(value)
    return ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")


def filter_frame(
    df: pd.DataFrame,
    start: date | datetime | None = None,
    end: date | datetime | None = None,
    client_ids: list[str] | None = None,
) -> pd.DataFrame:
    """
    Keep rows created inside [start, end] and belonging to client_ids.

    A plain date as `end` includes that whole day.
    """
    if client_ids:
        df = df[df["client_id"].isin(client_ids)]
    if start is not None:
        df = df[df["created_at"] >= _utc_timestamp(start)]
    if end is not None:
        if isinstance(end, date) and not isinstance(end, datetime):
            df = df[df["created_at"] < _utc_timestamp(end) + pd.Timedelta(days=1)]
        else:
            df = df[df["created_at"] <= _utc_timestamp(end)]
    return df


def _period_label(start: date | datetime | None, end: date | datetime | None) -> str:
    if start and end:
        return f"{start:%d/%m/%Y} - {end:%d/%m/%Y}"
    if start:
        return f"A partir de {start:%d/%m/%Y}"
    if end:
        return f"Até {end:%d/%m/%Y}"
    return ALL_PERIODS_LABEL


# =============================================================================
# Reports
# =============================================================================

def build_report(
    packages: list[Package],
    start: date | datetime | None = None,
    end: date | datetime | None = None,
    client_ids: list[str] | None = None,
) -> FinancialReport:
    """
    Totals over the packages and posts matching the filters.

    Example:
        report = build_report(packages, start=date(2026, 1, 1))
        print(report.total_revenue, report.net_profit)
    """
    df = filter_frame(packages_frame(packages), start, end, client_ids)

    return FinancialReport(
        total_revenue=_decimal_sum(df["total_value"]),
        total_juninho_commission=_decimal_sum(df["juninho_commission"]),
        total_natalia_commission=_decimal_sum(df["natalia_commission"]),
        total_engagement_cost=_decimal_sum(df["engagement_cost"]),
        total_pro_labore=_decimal_sum(df["pro_labore"]),
        net_profit=_decimal_sum(df["net_profit"]),
        packages_count=int((df["type"] == PackageType.PACKAGE.value).sum()),
        posts_count=int((df["type"] == PackageType.POST.value).sum()),
        period=_period_label(start, end),
    )


def monthly_breakdown(
    packages: list[Package],
    start: date | datetime | None = None,
    end: date | datetime | None = None,
    client_ids: list[str] | None = None,
) -> list[MonthlyFigures]:
    """Revenue, expenses and profit per calendar month, oldest first."""
    df = filter_frame(packages_frame(packages), start, end, client_ids)
    if df.empty:
        return []

    df = df.assign(
        month=df["created_at"].dt.strftime("%Y-%m"),
        expenses=df["total_value"] - df["net_profit"],
    )
    grouped = (
        df.groupby("month")[["total_value", "expenses", "net_profit"]]
        .agg(_decimal_sum)
        .sort_index()
    )

    return [
        MonthlyFigures(
            month=month,
            revenue=row["total_value"],
            expenses=row["expenses"],
            profit=row["net_profit"],
        )
        for month, row in grouped.iterrows()
    ]


def dashboard_metrics(
    packages: list[Package],
    videos: list[Video],
    now: datetime | None = None,
    include_revenue: bool = True,
) -> DashboardMetrics:
    """
    Headline numbers: active packages/posts, packages created this month,
    videos not yet engaged and total revenue.
    """
    now = now or utc_now()
    df = packages_frame(packages)

    is_package = df["type"] == PackageType.PACKAGE.value
    is_post = df["type"] == PackageType.POST.value
    is_active = df["status"] == PackageStatus.ACTIVE.value
    this_month = (
        (df["created_at"].dt.year == now.year)
        & (df["created_at"].dt.month == now.month)
    )

    return DashboardMetrics(
        active_packages=int((is_package & is_active).sum()),
        packages_this_month=int((is_package & this_month).sum()),
        active_posts=int((is_post & is_active).sum()),
        pending_videos=sum(1 for v in videos if v.status != VideoStatus.ENGAGED),
        total_revenue=_decimal_sum(df["total_value"]) if include_revenue else None,
    )


def export_csv(
    packages: list[Package],
    start: date | datetime | None = None,
    end: date | datetime | None = None,
    client_ids: list[str] | None = None,
) -> str:
    """
    CSV text of the package ledger.

    Amounts have two decimal places; the `loss` column flags contracts with
    a negative net profit.
    """
    df = filter_frame(packages_frame(packages), start, end, client_ids)
    df = df.sort_values("created_at")

    export = df.drop(columns=["id"]).assign(
        created_at=df["created_at"].dt.strftime("%Y-%m-%d"),
        loss=df["net_profit"].map(lambda v: v < 0),
    )
    for column in AMOUNT_COLUMNS:
        export[column] = export[column].map(format_amount)

    buffer = io.StringIO()
    export.to_csv(buffer, index=False)
    return buffer.getvalue()


# =============================================================================
# Service
# =============================================================================

class ReportService:
    """
    Reads packages from the repository and runs the report functions.

    Financial figures are restricted to admin and financial users.
    """

    def __init__(self, repository: PromoRepository):
        self.repository = repository

    def report(
        self,
        requester: Requester,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
        client_ids: list[str] | None = None,
    ) -> FinancialReport:
        require_role(requester, FINANCIAL_ROLES, "view financial reports")
        return build_report(self.repository.list_packages(), start, end, client_ids)

    def monthly(
        self,
        requester: Requester,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
        client_ids: list[str] | None = None,
    ) -> list[MonthlyFigures]:
        require_role(requester, FINANCIAL_ROLES, "view financial reports")
        return monthly_breakdown(self.repository.list_packages(), start, end, client_ids)

    def export(
        self,
        requester: Requester,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
        client_ids: list[str] | None = None,
    ) -> str:
        require_role(requester, FINANCIAL_ROLES, "export financial reports")
        packages = self.repository.list_packages()
        logger.info(f"Exporting {len(packages)} packages for user {requester.id}")
        return export_csv(packages, start, end, client_ids)

    def dashboard(self, requester: Requester) -> DashboardMetrics:
        """Any role may see the counters; revenue only for financial roles."""
        return dashboard_metrics(
            self.repository.list_packages(),
            self.repository.list_videos(),
            include_revenue=requester.has_role(*FINANCIAL_ROLES),
        )
