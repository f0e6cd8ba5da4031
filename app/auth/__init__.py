# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication using Supabase Auth.
#
# Usage:
#   from app.auth import get_current_user
#
#   @router.get("/protected")
#   async def protected(user: Requester = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import decode_token, get_current_user
from app.auth.models import TokenPayload, UserResponse

__all__ = [
    "decode_token",
    "get_current_user",
    "TokenPayload",
    "UserResponse",
]
