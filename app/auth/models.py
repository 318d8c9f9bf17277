# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict
from uuid import UUID
from typing import Optional


class AuthUser(BaseModel):
    """
    Authenticated user extracted from Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database. The email links the user to the
    player rows coaches create.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None

