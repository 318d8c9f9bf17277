# =============================================================================
# core/models/player.py - Player Schemas
# =============================================================================
# Players are plain roster rows owned by a team. A player may or may not
# have an account; the link to an account is the email address.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator


class PlayerInput(BaseModel):
    """
    One row of the "add players" form.

    Rows with a blank name are allowed here and dropped by the service,
    so a half-filled form can be submitted as-is.
    """

    name: str = Field(default="", max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    birth_year: int | None = Field(default=None, ge=1900, le=2100)

    @field_validator("email", "phone", mode="before")
    @classmethod
    def blank_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class PlayerBatchCreate(BaseModel):
    """
    Schema for adding several players at once.

    Example:
        {
            "players": [
                {"name": "Alva", "email": "alva@example.com"},
                {"name": ""}
            ],
            "send_invites": true
        }
    """

    players: list[PlayerInput] = Field(..., min_length=1)
    send_invites: bool = Field(
        default=True,
        description="Email every added player that has an email address"
    )


class PlayerUpdate(BaseModel):
    """Fields a coach may change on a player."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    birth_year: int | None = Field(default=None, ge=1900, le=2100)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("Player name cannot be null")
        value = value.strip()
        if not value:
            raise ValueError("Player name cannot be blank")
        return value

    @field_validator("email", "phone", mode="before")
    @classmethod
    def blank_is_none(cls, value):
        # Clearing the field on the edit form removes the contact detail
        if isinstance(value, str) and not value.strip():
            return None
        return value


class PlayerResponse(BaseModel):
    """A player as returned to clients."""

    id: UUID
    team_id: UUID
    name: str
    email: str | None = None
    phone: str | None = None
    birth_year: int | None = None
    created_at: datetime | None = None
