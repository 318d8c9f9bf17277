# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Verifies the JWTs issued by Supabase Auth and guards protected paths.
# Signup/login itself happens client-side against Supabase.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import decode_token, get_current_user, get_current_user_optional
from app.auth.middleware import ProtectedRouteMiddleware
from app.auth.models import AuthUser

__all__ = [
    "decode_token",
    "get_current_user",
    "get_current_user_optional",
    "ProtectedRouteMiddleware",
    "AuthUser",
]
