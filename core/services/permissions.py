# =============================================================================
# core/services/permissions.py - Role Checks
# =============================================================================
# Authorization lives in the service layer so no transport can bypass it.
# The video workflow has its own step-specific rule (see
# engagement_workflow.authorize_transition); everything else uses the role
# sets below.
# =============================================================================

import logging

from app.exceptions import PermissionDeniedError
from core.models.user import Requester, UserRole

logger = logging.getLogger(__name__)

# Who may create/cancel packages and delete clients
MANAGEMENT_ROLES = (UserRole.ADMIN,)

# Who may see money and tick payments
FINANCIAL_ROLES = (UserRole.ADMIN, UserRole.FINANCIAL)


def require_role(requester: Requester, roles: tuple[UserRole, ...], action: str) -> None:
    """
    Raise PermissionDeniedError unless the requester has one of `roles`.

    Example:
        require_role(requester, FINANCIAL_ROLES, "update payment status")
    """
    if requester.has_role(*roles):
        return
    logger.warning(f"Denied '{action}' for user {requester.id} (role={requester.role_name})")
    raise PermissionDeniedError(requester.role_name, action)
