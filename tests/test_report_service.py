# =============================================================================
# tests/test_report_service.py - Financial Report Tests
# =============================================================================
# Tests for period/client filtered totals, monthly breakdown, CSV export
# and dashboard metrics.
#
# Run with: pytest tests/test_report_service.py -v
# =============================================================================

import io
from datetime import date, datetime, timezone
from decimal import Decimal

import pandas as pd
import pytest

from app.exceptions import PermissionDeniedError
from core.models.package import Package, PackageStatus, PackageType
from core.models.video import Video, VideoStatus
from core.services.financial_calculator import calculate_financials
from core.services.report_service import (
    build_report,
    dashboard_metrics,
    export_csv,
    monthly_breakdown,
)


def _package(
    id,
    value,
    created_at,
    type=PackageType.PACKAGE,
    client_id="c1",
    status=PackageStatus.ACTIVE,
):
    breakdown = calculate_financials(Decimal(value), type)
    return Package(
        id=id,
        client_id=client_id,
        client_name=f"Client {client_id}",
        type=type,
        total_value=Decimal(value),
        juninho_commission=breakdown.juninho_commission,
        natalia_commission=breakdown.natalia_commission,
        engagement_cost=breakdown.engagement_cost,
        pro_labore=breakdown.pro_labore,
        net_profit=breakdown.net_profit,
        status=status,
        video_count=5 if type == PackageType.PACKAGE else 1,
        created_at=created_at,
        updated_at=created_at,
    )


def _utc(year, month, day, hour=12):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.fixture
def packages():
    return [
        _package("p1", "1000", _utc(2026, 1, 15)),
        _package("p2", "100", _utc(2026, 1, 31, 23), type=PackageType.POST),
        _package("p3", "500", _utc(2026, 2, 10), client_id="c2"),
        _package("p4", "0", _utc(2026, 3, 1), status=PackageStatus.CANCELLED),
    ]


# =============================================================================
# Report
# =============================================================================

class TestBuildReport:
    """Tests for build_report."""

    def test_totals_over_all_packages(self, packages):
        report = build_report(packages)

        assert report.total_revenue == Decimal("1600")
        assert report.total_juninho_commission == Decimal("80")
        assert report.total_natalia_commission == Decimal("80")
        assert report.total_engagement_cost == Decimal("32")
        assert report.total_pro_labore == Decimal("1120")
        # 220 + 3 + 95 - 30
        assert report.net_profit == Decimal("288")
        assert report.packages_count == 3
        assert report.posts_count == 1
        assert report.period == "Todos os períodos"

    def test_revenue_minus_expenses_is_profit(self, packages):
        report = build_report(packages)

        assert report.total_revenue - report.total_expenses == report.net_profit

    def test_period_filter_includes_end_day(self, packages):
        report = build_report(packages, start=date(2026, 1, 1), end=date(2026, 1, 31))

        assert report.total_revenue == Decimal("1100")
        assert report.period == "01/01/2026 - 31/01/2026"

    def test_open_ended_periods(self, packages):
        assert build_report(packages, start=date(2026, 2, 1)).period == "A partir de 01/02/2026"
        assert build_report(packages, end=date(2026, 2, 1)).period == "Até 01/02/2026"

    def test_client_filter(self, packages):
        report = build_report(packages, client_ids=["c2"])

        assert report.total_revenue == Decimal("500")
        assert report.packages_count == 1

    def test_empty_report(self):
        report = build_report([])

        assert report.total_revenue == Decimal("0")
        assert report.packages_count == 0


# =============================================================================
# Monthly Breakdown
# =============================================================================

class TestMonthlyBreakdown:
    """Tests for monthly_breakdown."""

    def test_groups_by_month(self, packages):
        months = monthly_breakdown(packages)

        assert [m.month for m in months] == ["2026-01", "2026-02", "2026-03"]
        assert months[0].revenue == Decimal("1100")
        assert months[0].profit == Decimal("223")
        assert months[0].expenses == Decimal("877")
        assert months[2].profit == Decimal("-30")

    def test_empty(self):
        assert monthly_breakdown([]) == []


# =============================================================================
# CSV Export
# =============================================================================

class TestExportCsv:
    """Tests for export_csv."""

    def test_csv_columns_and_amounts(self, packages):
        df = pd.read_csv(io.StringIO(export_csv(packages)), dtype=str)

        assert "id" not in df.columns
        assert list(df["created_at"]) == ["2026-01-15", "2026-01-31", "2026-02-10", "2026-03-01"]
        assert df.loc[0, "net_profit"] == "220.00"
        assert df.loc[3, "net_profit"] == "-30.00"
        assert list(df["loss"]) == ["False", "False", "False", "True"]

    def test_export_respects_filters(self, packages):
        df = pd.read_csv(io.StringIO(export_csv(packages, client_ids=["c2"])), dtype=str)

        assert len(df) == 1
        assert df.loc[0, "total_value"] == "500.00"


# =============================================================================
# Dashboard
# =============================================================================

class TestDashboardMetrics:
    """Tests for dashboard_metrics."""

    def test_counts(self, packages):
        videos = [
            Video(
                id=f"v{i}",
                package_id="p1",
                video_number=i,
                status=VideoStatus.ENGAGED if i < 3 else VideoStatus.BRIEFING_SENT,
                created_at=_utc(2026, 1, 15),
                updated_at=_utc(2026, 1, 15),
            )
            for i in range(1, 6)
        ]

        metrics = dashboard_metrics(packages, videos, now=_utc(2026, 1, 20))

        assert metrics.active_packages == 2
        assert metrics.packages_this_month == 1
        assert metrics.active_posts == 1
        assert metrics.pending_videos == 3
        assert metrics.total_revenue == Decimal("1600")

    def test_revenue_hidden(self, packages):
        metrics = dashboard_metrics(packages, [], include_revenue=False)

        assert metrics.total_revenue is None


# =============================================================================
# Service Permissions
# =============================================================================

class TestReportService:
    """Tests for role checks in ReportService."""

    def test_financial_user_gets_report(self, report_service, make_package, financial_user):
        make_package(total_value="1000")

        report = report_service.report(financial_user)

        assert report.total_revenue == Decimal("1000")

    def test_video_manager_denied_report(self, report_service, video_manager):
        with pytest.raises(PermissionDeniedError):
            report_service.report(video_manager)
        with pytest.raises(PermissionDeniedError):
            report_service.export(video_manager)
        with pytest.raises(PermissionDeniedError):
            report_service.monthly(video_manager)

    def test_dashboard_hides_revenue_from_video_manager(
        self, report_service, make_package, video_manager, admin
    ):
        make_package()

        assert report_service.dashboard(video_manager).total_revenue is None
        assert report_service.dashboard(admin).total_revenue == Decimal("1000")
        assert report_service.dashboard(video_manager).pending_videos == 5
