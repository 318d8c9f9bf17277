# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for authentication-related operations.
#
# Note: Actual signup/login is handled by Supabase Auth client-side.
# These routes are for getting user info after authentication.
# =============================================================================

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user, get_current_user_optional
from app.auth.models import AuthUser
from app.config import settings
from core.models.profile import ProfileResponse
from core.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=ProfileResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> ProfileResponse:
    """
    Get the current authenticated user's profile.

    Users who never saved a profile get one built from their token
    (and their player row, if a coach added them).
    """
    profile = ProfileService.get_profile(user.id, user.email)
    return ProfileResponse(**profile)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }


@router.get("/session")
async def get_session(
    user: Optional[AuthUser] = Depends(get_current_user_optional)
) -> dict:
    """
    Report whether the request carries a valid session.

    Never returns 401; clients use it to decide whether to send the
    user to the login page.
    """
    if user is None:
        return {"authenticated": False, "login_url": settings.LOGIN_URL}

    return {
        "authenticated": True,
        "user_id": str(user.id),
        "email": user.email,
    }
