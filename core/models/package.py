# =============================================================================
# core/models/package.py - Package / Post Schemas
# =============================================================================
# A package is a contract with a client covering five promotional videos.
# A post is the single-video variant; both live in the same record and are
# told apart by `type`.
#
# The four cost fields and net_profit are derived once at creation time
# (see core/services/financial_calculator.py) and never edited afterwards.
# Only the paid/unpaid checklist in payment_status changes.
# =============================================================================

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .financial import CostModel


class PackageType(str, Enum):
    """Kind of contract."""
    PACKAGE = "package"
    POST = "post"


PACKAGE_TYPE_LABELS = {
    PackageType.PACKAGE: "Pacote Musical",
    PackageType.POST: "Post Individual",
}

# Number of videos generated for each contract type
DEFAULT_VIDEO_COUNT = {
    PackageType.PACKAGE: 5,
    PackageType.POST: 1,
}


class PackageStatus(str, Enum):
    """
    Lifecycle of a package.

    - active: Videos still in progress
    - completed: Every video reached "engaged" (set automatically)
    - cancelled: Stopped by an administrator

    Flow: active -> completed | cancelled
    """
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentField(str, Enum):
    """
    Checklist entries of a package.

    total_value_paid is the receivable; the others are payables.
    """
    TOTAL_VALUE_PAID = "total_value_paid"
    JUNINHO_COMMISSION_PAID = "juninho_commission_paid"
    NATALIA_COMMISSION_PAID = "natalia_commission_paid"
    ENGAGEMENT_COST_PAID = "engagement_cost_paid"
    PRO_LABORE_PAID = "pro_labore_paid"

    @property
    def amount_field(self) -> str:
        """Name of the Package attribute holding this entry's amount."""
        return self.value.removesuffix("_paid")

    @property
    def is_receivable(self) -> bool:
        return self is PaymentField.TOTAL_VALUE_PAID


PAYMENT_FIELD_LABELS = {
    PaymentField.TOTAL_VALUE_PAID: "Valor Total",
    PaymentField.JUNINHO_COMMISSION_PAID: "Comissão Juninho",
    PaymentField.NATALIA_COMMISSION_PAID: "Comissão Natália",
    PaymentField.ENGAGEMENT_COST_PAID: "Custo Engajamento",
    PaymentField.PRO_LABORE_PAID: "Pró-Labore",
}


class PaymentStatus(BaseModel):
    """Paid/unpaid flags. Amounts always come from the parent package."""

    total_value_paid: bool = False
    juninho_commission_paid: bool = False
    natalia_commission_paid: bool = False
    engagement_cost_paid: bool = False
    pro_labore_paid: bool = False


class PackageCreate(BaseModel):
    """
    Schema for creating a package or post.

    Either client_id (a registered client) or client_name (a walk-in)
    must be given. cost_model switches the financial calculation to
    configurable mode; without it the flat rates apply.

    Example:
        {
            "client_id": "c1a2...",
            "type": "package",
            "total_value": "1000.00"
        }
    """

    client_id: str | None = Field(
        default=None,
        description="Registered client buying the contract"
    )

    client_name: str | None = Field(
        default=None,
        max_length=255,
        description="Client name, required when client_id is not given"
    )

    type: PackageType = Field(
        default=PackageType.PACKAGE,
        description="package (5 videos) or post (single video)"
    )

    total_value: Decimal | None = Field(
        default=None,
        description="Contract value"
    )

    video_count: int | None = Field(
        default=None,
        description="Number of videos; only posts may override the default"
    )

    cost_model: CostModel | None = Field(
        default=None,
        description="Configurable cost terms; omit to use the flat rates"
    )


class Package(BaseModel):
    """Stored package/post record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    client_id: str | None = None
    client_name: str
    type: PackageType
    total_value: Decimal
    juninho_commission: Decimal
    natalia_commission: Decimal
    engagement_cost: Decimal
    pro_labore: Decimal
    net_profit: Decimal
    status: PackageStatus = PackageStatus.ACTIVE
    payment_status: PaymentStatus = Field(default_factory=PaymentStatus)
    video_count: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime

    @property
    def is_loss(self) -> bool:
        return self.net_profit < 0

    def amount_for(self, field: PaymentField) -> Decimal:
        return getattr(self, field.amount_field)


class PaymentUpdateRequest(BaseModel):
    """
    Toggle one checklist entry.

    Example:
        {"field": "natalia_commission_paid", "paid": true}
    """

    field: PaymentField
    paid: bool


class PaymentItem(BaseModel):
    """One line of the payment checklist."""

    field: PaymentField
    name: str
    amount: Decimal
    paid: bool


class PaymentSummary(BaseModel):
    """Receivables and payables of a package with running totals."""

    package_id: str
    receivables: list[PaymentItem] = Field(default_factory=list)
    payables: list[PaymentItem] = Field(default_factory=list)
    total_received: Decimal = Decimal("0")
    total_pending_receipt: Decimal = Decimal("0")
    total_paid: Decimal = Decimal("0")
    total_pending_payment: Decimal = Decimal("0")

    @property
    def all_received(self) -> bool:
        return all(item.paid for item in self.receivables)

    @property
    def all_paid(self) -> bool:
        return all(item.paid for item in self.payables)
