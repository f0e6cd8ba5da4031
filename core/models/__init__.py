# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - client.py: Client CRUD schemas
# - package.py: Package/post records and the payment checklist
# - video.py: Video records and the workflow status enum
# - financial.py: Cost breakdowns, cost models and reports
# - user.py: Requester and roles used for authorization
# - notification.py: Messages emitted by the workflow
#
# These models define the "contract" between API and clients.
# =============================================================================

from .client import Client, ClientCreate, ClientUpdate
from .financial import (
    CostItem,
    CostModel,
    DashboardMetrics,
    FinancialBreakdown,
    FinancialReport,
    MonthlyFigures,
)
from .notification import Notification, NotificationSeverity
from .package import (
    PACKAGE_TYPE_LABELS,
    PAYMENT_FIELD_LABELS,
    Package,
    PackageCreate,
    PackageStatus,
    PackageType,
    PaymentField,
    PaymentItem,
    PaymentStatus,
    PaymentSummary,
    PaymentUpdateRequest,
)
from .user import Requester, UserRole
from .video import VIDEO_STATUS_LABELS, Video, VideoAdvanceRequest, VideoStatus

# -----------------------------------------------------------------------------
# __all__ - Explicit public API
# -----------------------------------------------------------------------------
__all__ = [
    # Client
    "Client",
    "ClientCreate",
    "ClientUpdate",
    # Financial
    "CostItem",
    "CostModel",
    "DashboardMetrics",
    "FinancialBreakdown",
    "FinancialReport",
    "MonthlyFigures",
    # Notification
    "Notification",
    "NotificationSeverity",
    # Package
    "PACKAGE_TYPE_LABELS",
    "PAYMENT_FIELD_LABELS",
    "Package",
    "PackageCreate",
    "PackageStatus",
    "PackageType",
    "PaymentField",
    "PaymentItem",
    "PaymentStatus",
    "PaymentSummary",
    "PaymentUpdateRequest",
    # User
    "Requester",
    "UserRole",
    # Video
    "VIDEO_STATUS_LABELS",
    "Video",
    "VideoAdvanceRequest",
    "VideoStatus",
]
