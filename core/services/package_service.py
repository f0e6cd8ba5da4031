# =============================================================================
# core/services/package_service.py - Package and Post Business Logic
# =============================================================================
# Creates packages/posts together with their videos, lists them, cancels
# them and maintains the payment checklist.
# =============================================================================

import logging

from app.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from core.models.package import (
    DEFAULT_VIDEO_COUNT,
    PAYMENT_FIELD_LABELS,
    Package,
    PackageCreate,
    PackageStatus,
    PackageType,
    PaymentField,
    PaymentItem,
    PaymentSummary,
)
from core.models.user import Requester
from core.models.video import Video, VideoStatus
from core.repositories.base import PromoRepository
from core.services.financial_calculator import (
    calculate_financials,
    calculate_with_cost_model,
    to_amount,
)
from core.services.permissions import FINANCIAL_ROLES, MANAGEMENT_ROLES, require_role
from lib.utils import new_id, utc_now

logger = logging.getLogger(__name__)


class PackageService:
    """
    Service for package/post management.

    Provides a clean interface between API routes and the repository.
    """

    def __init__(self, repository: PromoRepository):
        self.repository = repository

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    def _resolve_video_count(self, data: PackageCreate) -> int:
        default = DEFAULT_VIDEO_COUNT[data.type]
        if data.video_count is None:
            return default

        if data.type == PackageType.PACKAGE and data.video_count != default:
            raise ValidationError(
                f"A package always has {default} videos",
                field="video_count",
                suggestion="Omit video_count or create a post instead",
            )
        if data.video_count < 1:
            raise ValidationError(
                f"video_count must be at least 1: {data.video_count}",
                field="video_count",
            )
        return data.video_count

    def create_package(self, data: PackageCreate, requester: Requester) -> Package:
        """
        Create a package or post and its videos.

        Every video starts at "briefing_sent". The cost fields are computed
        here once and never edited afterwards.

        Args:
            data: Creation request
            requester: Must be an admin

        Returns:
            The stored package

        Raises:
            PermissionDeniedError: If the requester is not an admin
            NotFoundError: If client_id references an unknown client
            ValidationError: If the value, client or video count is invalid
        """
        require_role(requester, MANAGEMENT_ROLES, f"create a {data.type.value}")

        client_id = data.client_id
        client_name = (data.client_name or "").strip()
        if client_id:
            client = self.repository.get_client(client_id)
            if client is None:
                raise NotFoundError("client", client_id)
            client_name = client.name
        elif not client_name:
            raise ValidationError(
                "client_name is required when client_id is not given",
                field="client_name",
                suggestion="Select a registered client or type the client's name",
            )

        total_value = to_amount(data.total_value)
        video_count = self._resolve_video_count(data)

        if data.cost_model is not None:
            breakdown = calculate_with_cost_model(total_value, data.cost_model, video_count)
        else:
            breakdown = calculate_financials(total_value, data.type)

        now = utc_now()
        package = Package(
            id=new_id(),
            client_id=client_id,
            client_name=client_name,
            type=data.type,
            total_value=total_value,
            juninho_commission=breakdown.juninho_commission,
            natalia_commission=breakdown.natalia_commission,
            engagement_cost=breakdown.engagement_cost,
            pro_labore=breakdown.pro_labore,
            net_profit=breakdown.net_profit,
            status=PackageStatus.ACTIVE,
            video_count=video_count,
            created_at=now,
            updated_at=now,
        )
        videos = [
            Video(
                id=new_id(),
                package_id=package.id,
                video_number=number,
                status=VideoStatus.BRIEFING_SENT,
                created_at=now,
                updated_at=now,
            )
            for number in range(1, video_count + 1)
        ]

        stored = self.repository.add_package(package, videos)
        logger.info(
            f"Created {stored.type.value} {stored.id} for '{stored.client_name}' "
            f"(value={stored.total_value}, net_profit={stored.net_profit})"
        )
        if stored.is_loss:
            logger.warning(f"{stored.type.value.capitalize()} {stored.id} is loss-making: {stored.net_profit}")
        return stored

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_package(self, package_id: str) -> Package:
        """
        Raises:
            NotFoundError: If the package doesn't exist
        """
        package = self.repository.get_package(package_id)
        if package is None:
            raise NotFoundError("package", package_id)
        return package

    def list_packages(
        self,
        type: PackageType | None = None,
        status: PackageStatus | None = None,
        client_id: str | None = None,
    ) -> list[Package]:
        return self.repository.list_packages(type=type, status=status, client_id=client_id)

    def list_videos(self, package_id: str) -> list[Video]:
        self.get_package(package_id)
        return self.repository.list_videos(package_id)

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def cancel_package(self, package_id: str, requester: Requester) -> Package:
        """
        Cancel an active package.

        Raises:
            PermissionDeniedError: If the requester is not an admin
            NotFoundError: If the package doesn't exist
            InvalidTransitionError: If the package is already completed or cancelled
        """
        require_role(requester, MANAGEMENT_ROLES, "cancel a package")
        package = self.get_package(package_id)

        cancelled = None
        if package.status == PackageStatus.ACTIVE:
            cancelled = self.repository.update_package_status(
                package_id,
                PackageStatus.CANCELLED,
                utc_now(),
                expected=PackageStatus.ACTIVE,
            )
        if cancelled is None:
            # Not active, or completed between the read and the write
            current = self.get_package(package_id)
            raise InvalidTransitionError(
                current_status=current.status.value,
                requested_status=PackageStatus.CANCELLED.value,
                entity="package",
            )

        logger.info(f"Cancelled package {package_id} by {requester.id}")
        return cancelled

    # -------------------------------------------------------------------------
    # Payments
    # -------------------------------------------------------------------------

    def update_payment_status(
        self,
        package_id: str,
        field: PaymentField | str,
        paid: bool,
        requester: Requester,
    ) -> Package:
        """
        Tick or untick one entry of the payment checklist.

        Raises:
            PermissionDeniedError: Unless the requester is admin or financial
            ValidationError: If the field name is unknown
            NotFoundError: If the package doesn't exist
        """
        require_role(requester, FINANCIAL_ROLES, "update payment status")
        try:
            field = PaymentField(field)
        except ValueError:
            raise ValidationError(
                f"Unknown payment field: {field!r}",
                field="field",
                suggestion=f"Use one of: {', '.join(f.value for f in PaymentField)}",
            )

        updated = self.repository.update_payment_flag(package_id, field, paid, utc_now())
        if updated is None:
            raise NotFoundError("package", package_id)

        logger.info(
            f"Payment '{field.value}' of package {package_id} set to "
            f"{'paid' if paid else 'unpaid'} by {requester.id}"
        )
        return updated

    def payment_summary(self, package_id: str, requester: Requester) -> PaymentSummary:
        """
        Build the receivable/payable checklist with running totals.

        Amounts are read from the package; the checklist only stores flags.
        """
        require_role(requester, FINANCIAL_ROLES, "view payments")
        package = self.get_package(package_id)

        summary = PaymentSummary(package_id=package.id)
        for field in PaymentField:
            item = PaymentItem(
                field=field,
                name=PAYMENT_FIELD_LABELS[field],
                amount=package.amount_for(field),
                paid=getattr(package.payment_status, field.value),
            )
            if field.is_receivable:
                summary.receivables.append(item)
                if item.paid:
                    summary.total_received += item.amount
                else:
                    summary.total_pending_receipt += item.amount
            else:
                summary.payables.append(item)
                if item.paid:
                    summary.total_paid += item.amount
                else:
                    summary.total_pending_payment += item.amount

        return summary
