# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for authentication-related operations.
#
# Note: Actual signup/login is handled by Supabase Auth client-side.
# These routes are for getting user info after authentication.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import UserResponse
from core.models.user import Requester

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user: Requester = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current authenticated user with their dashboard role.

    The dashboard uses the role to decide which menus to show; the API
    enforces the same rules on every call.
    """
    return UserResponse(id=user.id, email=user.email, role=user.role)


@router.get("/verify")
async def verify_token(
    user: Requester = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.
    """
    return {
        "valid": True,
        "user_id": user.id,
        "role": user.role_name,
    }
