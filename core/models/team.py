# =============================================================================
# core/models/team.py - Team Schemas
# =============================================================================
# These models define the API contract for team operations:
# - TeamCreate / TeamUpdate: Coach input
# - TeamResponse: A team row returned to clients
# - TeamWithPlayers: Team plus its roster (used by the teams overview)
#
# A team is owned by the coach who created it (admin_id).
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .player import PlayerResponse


class TeamCreate(BaseModel):
    """
    Schema for creating a new team.

    Example:
        {
            "name": "P14 Blue",
            "description": "Saturday league"
        }
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Team name (unique across the system)"
    )

    description: str | None = Field(
        default=None,
        max_length=2000,
        description="Optional free-text description"
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Team name cannot be blank")
        return value

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, value: str | None) -> str | None:
        # An empty form field is stored as NULL
        return value or None


class TeamUpdate(BaseModel):
    """Fields a coach may change on an existing team."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str | None) -> str:
        # Defaults skip validation, so None here is an explicit null
        if value is None:
            raise ValueError("Team name cannot be null")
        value = value.strip()
        if not value:
            raise ValueError("Team name cannot be blank")
        return value


class TeamResponse(BaseModel):
    """A team as returned to clients."""

    id: UUID
    name: str
    description: str | None = None
    admin_id: UUID | None = None
    created_at: datetime | None = None


class TeamWithPlayers(TeamResponse):
    """Team plus its players, ordered by name."""

    players: list[PlayerResponse] = Field(default_factory=list)
