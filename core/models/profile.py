# =============================================================================
# core/models/profile.py - User Profile Schemas
# =============================================================================
# A profile extends a Supabase auth user with display data and a role.
# The role decides what a user may do: only players can RSVP.
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """Roles a user can pick on their profile."""
    COACH = "coach"
    PLAYER = "player"
    ADMIN = "admin"
    PARENT = "parent"


class ProfileUpdate(BaseModel):
    """
    Schema for saving a profile.

    Example:
        {
            "name": "Alva Berg",
            "phone": "070-123 45 67",
            "role": "player"
        }
    """

    name: str = Field(default="", max_length=255)
    phone: str = Field(default="", max_length=50)
    role: UserRole = UserRole.PLAYER
    avatar_url: str | None = Field(default=None, max_length=2048)


class ProfileResponse(BaseModel):
    """Merged view of auth user, profiles row and matching player row."""

    id: UUID
    email: str = ""
    name: str = ""
    phone: str = ""
    role: UserRole = UserRole.PLAYER
    avatar_url: str | None = None
    updated_at: datetime | None = None
