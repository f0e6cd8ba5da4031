# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Any, Optional

from pydantic import BaseModel, Field

from core.models.user import UserRole


class TokenPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    The dashboard role lives in app_metadata (set by an admin, not editable
    by the user). The top-level `role` claim is Supabase's Postgres role
    ("authenticated") and is not used for authorization.
    """
    sub: str  # User ID
    email: Optional[str] = None
    aud: str  # Audience (should be "authenticated")
    exp: int  # Expiration timestamp
    app_metadata: dict[str, Any] = Field(default_factory=dict)
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def dashboard_role(self) -> Optional[UserRole]:
        # user_metadata is writable by the user, so it never grants a role
        raw = self.app_metadata.get("role")
        try:
            return UserRole(raw) if raw else None
        except ValueError:
            return None


class UserResponse(BaseModel):
    """Current user as returned by /auth/me."""
    id: str
    email: Optional[str] = None
    role: Optional[UserRole] = None
