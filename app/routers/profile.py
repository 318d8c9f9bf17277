# =============================================================================
# app/routers/profile.py - Profile Endpoints
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import AuthUser, get_current_user
from core.models.profile import ProfileResponse, ProfileUpdate
from core.services.profile_service import ProfileService

router = APIRouter()


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(user: AuthUser = Depends(get_current_user)):
    """The caller's profile, with defaults filled in from their player row."""
    return ProfileService.get_profile(user.id, user.email)


@router.put("/profile", response_model=ProfileResponse)
async def save_profile(
    request: ProfileUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """Create or replace the caller's profile (name, phone, role, avatar)."""
    return ProfileService.save_profile(user.id, user.email, request)
