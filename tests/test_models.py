# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the Pydantic models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Models serialize to JSON properly
# - Default values work as expected
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from core.models import (
    Client,
    ClientCreate,
    ClientUpdate,
    CostItem,
    CostModel,
    FinancialBreakdown,
    FinancialReport,
    Package,
    PackageCreate,
    PackageStatus,
    PackageType,
    PaymentField,
    PaymentStatus,
    PaymentSummary,
    PaymentItem,
    Requester,
    UserRole,
    VIDEO_STATUS_LABELS,
    Video,
    VideoAdvanceRequest,
    VideoStatus,
)

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Client Model Tests
# =============================================================================

class TestClientModels:
    """Tests for client schemas."""

    def test_client_create_defaults(self):
        """Only the name is required."""
        client = ClientCreate(name="MC Ritmo")

        assert client.agency_name is None
        assert client.is_frequent is False

    def test_client_create_rejects_empty_name(self):
        with pytest.raises(ValidationError):
            ClientCreate(name="")

    def test_client_update_tracks_set_fields(self):
        """Unset fields are not part of the change set."""
        update = ClientUpdate(is_frequent=True)

        assert update.model_dump(exclude_unset=True) == {"is_frequent": True}

    def test_client_from_dict(self):
        client = Client(
            id="c1",
            name="MC Ritmo",
            created_at="2026-03-10T12:00:00Z",
            updated_at="2026-03-10T12:00:00Z",
        )

        assert client.created_at == NOW


# =============================================================================
# Financial Model Tests
# =============================================================================

class TestFinancialModels:
    """Tests for breakdown, cost model and report models."""

    def test_breakdown_is_loss(self):
        """Negative net profit is flagged, not hidden."""
        breakdown = FinancialBreakdown(
            juninho_commission=Decimal("20"),
            natalia_commission=Decimal("0"),
            engagement_cost=Decimal("10"),
            pro_labore=Decimal("0"),
            net_profit=Decimal("-30"),
        )

        assert breakdown.is_loss is True
        assert breakdown.total_costs == Decimal("30")

    def test_breakdown_serializes_is_loss(self):
        breakdown = FinancialBreakdown(
            juninho_commission=Decimal("20"),
            natalia_commission=Decimal("50"),
            engagement_cost=Decimal("10"),
            pro_labore=Decimal("700"),
            net_profit=Decimal("220"),
        )

        data = breakdown.model_dump()

        assert data["is_loss"] is False
        assert data["net_profit"] == Decimal("220")

    def test_cost_model_defaults_all_enabled(self):
        model = CostModel()

        assert model.fixed_commission.enabled
        assert model.fixed_commission.value == Decimal("20")
        assert model.percentage_commission.value == Decimal("0.05")
        assert model.engagement_per_video.value == Decimal("2")
        assert model.pro_labore_rate.value == Decimal("0.70")

    def test_cost_item_rejects_negative_value(self):
        with pytest.raises(ValidationError):
            CostItem(value=Decimal("-1"))

    def test_report_defaults(self):
        report = FinancialReport()

        assert report.total_revenue == Decimal("0")
        assert report.total_expenses == Decimal("0")
        assert report.period == "Todos os períodos"


# =============================================================================
# Package Model Tests
# =============================================================================

class TestPackageModels:
    """Tests for package, payment and video models."""

    @pytest.fixture
    def package(self):
        return Package(
            id="p1",
            client_name="MC Ritmo",
            type=PackageType.PACKAGE,
            total_value=Decimal("1000"),
            juninho_commission=Decimal("20"),
            natalia_commission=Decimal("50"),
            engagement_cost=Decimal("10"),
            pro_labore=Decimal("700"),
            net_profit=Decimal("220"),
            video_count=5,
            created_at=NOW,
            updated_at=NOW,
        )

    def test_package_defaults(self, package):
        """New packages are active with nothing paid."""
        assert package.status == PackageStatus.ACTIVE
        assert package.payment_status == PaymentStatus()
        assert package.is_loss is False

    def test_amount_for_payment_field(self, package):
        assert package.amount_for(PaymentField.TOTAL_VALUE_PAID) == Decimal("1000")
        assert package.amount_for(PaymentField.PRO_LABORE_PAID) == Decimal("700")

    def test_payment_field_receivable(self):
        assert PaymentField.TOTAL_VALUE_PAID.is_receivable
        assert not PaymentField.ENGAGEMENT_COST_PAID.is_receivable
        assert PaymentField.ENGAGEMENT_COST_PAID.amount_field == "engagement_cost"

    def test_package_create_accepts_string_value(self):
        data = PackageCreate(client_name="MC Ritmo", total_value="1500.50")

        assert data.total_value == Decimal("1500.50")
        assert data.type == PackageType.PACKAGE
        assert data.cost_model is None

    def test_package_create_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            PackageCreate(client_name="MC Ritmo", type="album", total_value="10")

    def test_payment_summary_flags(self):
        summary = PaymentSummary(
            package_id="p1",
            receivables=[
                PaymentItem(
                    field=PaymentField.TOTAL_VALUE_PAID,
                    name="Valor Total",
                    amount=Decimal("100"),
                    paid=True,
                ),
            ],
            payables=[
                PaymentItem(
                    field=PaymentField.PRO_LABORE_PAID,
                    name="Pró-Labore",
                    amount=Decimal("70"),
                    paid=False,
                ),
            ],
        )

        assert summary.all_received is True
        assert summary.all_paid is False

    def test_video_number_is_one_based(self):
        with pytest.raises(ValidationError):
            Video(id="v1", package_id="p1", video_number=0, created_at=NOW, updated_at=NOW)

    def test_video_advance_request_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            VideoAdvanceRequest(status="published")

    def test_video_advance_request_parses_status(self):
        assert VideoAdvanceRequest(status="video_posted").status == VideoStatus.VIDEO_POSTED

    def test_every_video_status_has_a_label(self):
        assert set(VIDEO_STATUS_LABELS) == set(VideoStatus)


# =============================================================================
# User Model Tests
# =============================================================================

class TestRequester:
    """Tests for the requester identity."""

    def test_has_role(self):
        requester = Requester(id="u1", role=UserRole.FINANCIAL)

        assert requester.has_role(UserRole.ADMIN, UserRole.FINANCIAL)
        assert not requester.has_role(UserRole.ADMIN)

    def test_missing_role_is_anonymous(self):
        requester = Requester(id="u1")

        assert requester.role_name == "anonymous"
        assert not requester.has_role(UserRole.ADMIN)

    def test_requester_is_immutable(self):
        requester = Requester(id="u1", role=UserRole.ADMIN)

        with pytest.raises(ValidationError):
            requester.role = UserRole.FINANCIAL
