# =============================================================================
# core/models/user.py - Requester Schemas
# =============================================================================
# The business services receive the current user as a Requester and make
# every authorization decision from its role. How the requester was
# authenticated is the HTTP layer's concern (see app/auth/).
# =============================================================================

from enum import Enum

from pydantic import BaseModel, ConfigDict


class UserRole(str, Enum):
    """
    Dashboard roles.

    - admin: Full access
    - video_manager: Manages the video workflow (group send step only)
    - financial: Payments and reports
    """
    ADMIN = "admin"
    VIDEO_MANAGER = "video_manager"
    FINANCIAL = "financial"


class Requester(BaseModel):
    """The user on whose behalf a service call runs."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: UserRole | None = None
    email: str | None = None

    @property
    def role_name(self) -> str:
        return self.role.value if self.role else "anonymous"

    def has_role(self, *roles: UserRole) -> bool:
        return self.role in roles
