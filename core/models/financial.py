# =============================================================================
# core/models/financial.py - Financial Schemas
# =============================================================================
# Models for the cost breakdown of a contract and for aggregated reports.
#
# Amounts are Decimal end to end. Nothing here rounds; presentation layers
# format to two decimal places.
# =============================================================================

from decimal import Decimal

from pydantic import BaseModel, Field, computed_field


# Default cost parameters of a contract
DEFAULT_FIXED_COMMISSION = Decimal("20")
DEFAULT_PERCENTAGE_COMMISSION = Decimal("0.05")
DEFAULT_PACKAGE_ENGAGEMENT = Decimal("10")
DEFAULT_POST_ENGAGEMENT = Decimal("2")
DEFAULT_ENGAGEMENT_PER_VIDEO = Decimal("2")
DEFAULT_PRO_LABORE_RATE = Decimal("0.70")


class FinancialBreakdown(BaseModel):
    """
    Cost and profit derived from a contract's total value.

    net_profit may be negative; is_loss flags those contracts so consumers
    can render them distinctly instead of hiding the loss.
    """

    juninho_commission: Decimal = Field(..., description="Fixed commission")
    natalia_commission: Decimal = Field(..., description="Percentage commission")
    engagement_cost: Decimal = Field(..., description="Promotional spend")
    pro_labore: Decimal = Field(..., description="Owner's draw")
    net_profit: Decimal = Field(..., description="Total value minus every cost")

    @computed_field
    @property
    def is_loss(self) -> bool:
        return self.net_profit < 0

    @property
    def total_costs(self) -> Decimal:
        return (
            self.juninho_commission
            + self.natalia_commission
            + self.engagement_cost
            + self.pro_labore
        )


class CostItem(BaseModel):
    """One configurable cost term with its include/exclude toggle."""

    enabled: bool = True
    value: Decimal = Field(..., ge=0)


class CostModel(BaseModel):
    """
    Configurable cost model.

    Percentages are fractions (0.05 == 5%). Each term can be switched off
    independently; a disabled term contributes zero.

    Example:
        {
            "fixed_commission": {"enabled": true, "value": "20"},
            "percentage_commission": {"enabled": false, "value": "0.05"},
            "engagement_per_video": {"enabled": true, "value": "2"},
            "pro_labore_rate": {"enabled": true, "value": "0.70"}
        }
    """

    fixed_commission: CostItem = Field(
        default_factory=lambda: CostItem(value=DEFAULT_FIXED_COMMISSION)
    )
    percentage_commission: CostItem = Field(
        default_factory=lambda: CostItem(value=DEFAULT_PERCENTAGE_COMMISSION)
    )
    engagement_per_video: CostItem = Field(
        default_factory=lambda: CostItem(value=DEFAULT_ENGAGEMENT_PER_VIDEO)
    )
    pro_labore_rate: CostItem = Field(
        default_factory=lambda: CostItem(value=DEFAULT_PRO_LABORE_RATE)
    )


class FinancialReport(BaseModel):
    """Totals over a filtered set of packages and posts."""

    total_revenue: Decimal = Decimal("0")
    total_juninho_commission: Decimal = Decimal("0")
    total_natalia_commission: Decimal = Decimal("0")
    total_engagement_cost: Decimal = Decimal("0")
    total_pro_labore: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")
    packages_count: int = 0
    posts_count: int = 0
    period: str = "Todos os períodos"

    @property
    def total_expenses(self) -> Decimal:
        return (
            self.total_juninho_commission
            + self.total_natalia_commission
            + self.total_engagement_cost
            + self.total_pro_labore
        )


class MonthlyFigures(BaseModel):
    """Revenue, expenses and profit for a single calendar month."""

    month: str = Field(..., description="YYYY-MM")
    revenue: Decimal
    expenses: Decimal
    profit: Decimal


class DashboardMetrics(BaseModel):
    """
    Headline numbers for the dashboard landing page.

    total_revenue is None for roles that may not see financial figures.
    """

    active_packages: int = 0
    packages_this_month: int = 0
    active_posts: int = 0
    pending_videos: int = 0
    total_revenue: Decimal | None = None
