# =============================================================================
# core/models/event.py - Event & Invite Schemas
# =============================================================================
# These models define the API contract for scheduling and RSVP:
# - EventType: training or match
# - InviteStatus: pending -> accepted / declined
# - EventCreate / EventUpdate: Coach input
# - PlayerEvent: An upcoming event as seen by one player (with their RSVP)
# - EventDetail: PlayerEvent plus confirmed/total counts
# - RSVPRequest / RSVPResponse: A player's answer to an invite
# =============================================================================

import datetime as dt
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator


class EventType(str, Enum):
    """Kind of team activity."""
    TRAINING = "training"
    MATCH = "match"


class InviteStatus(str, Enum):
    """
    State of a player's invite to an event.

    Invites start as pending when the event is created; the player
    moves them to accepted or declined, and may change their mind.
    """
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class EventCreate(BaseModel):
    """
    Schema for scheduling an event.

    Example:
        {
            "title": "Training",
            "date": "2025-03-04",
            "start_time": "18:00",
            "end_time": "19:30",
            "type": "training",
            "location": "Central Sports Field"
        }
    """

    title: str = Field(..., min_length=1, max_length=255)
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    type: EventType = EventType.TRAINING
    location: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=4000)
    send_invites: bool = Field(
        default=True,
        description="Create pending invites and email the team"
    )

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self

    def to_row(self, team_id: str) -> dict:
        """Serialize for insertion into the events table."""
        return {
            "team_id": team_id,
            "title": self.title,
            "date": self.date.isoformat(),
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "type": self.type.value,
            "location": self.location,
            "description": self.description,
        }


class EventUpdate(BaseModel):
    """Fields a coach may change on an event."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    date: dt.date | None = None
    start_time: dt.time | None = None
    end_time: dt.time | None = None
    type: EventType | None = None
    location: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=4000)

    @field_validator("title", "date", "start_time", "end_time", "type")
    @classmethod
    def required_not_null(cls, value, info):
        # Only explicit nulls reach here; omitted fields keep the stored value
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    def to_row(self) -> dict:
        """Only the fields that were provided, serialized for the database."""
        row = {}
        for key, value in self.model_dump(exclude_unset=True).items():
            if isinstance(value, (dt.date, dt.time)):
                value = value.isoformat()
            elif isinstance(value, Enum):
                value = value.value
            row[key] = value
        return row


class EventResponse(BaseModel):
    """An event row as returned to coaches."""

    id: UUID
    team_id: UUID
    title: str
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    type: EventType
    location: str | None = None
    description: str | None = None
    created_at: dt.datetime | None = None


class PlayerEvent(BaseModel):
    """An event as seen by a player, including their own RSVP."""

    id: UUID
    title: str
    team: str
    team_id: UUID
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    type: EventType
    location: str = ""
    description: str = ""
    invite_status: InviteStatus | None = None
    invite_id: UUID | None = None


class EventDetail(PlayerEvent):
    """Event page: the event plus how many players have confirmed."""

    confirmed: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)


class RSVPRequest(BaseModel):
    """A player's answer. Only a final answer can be given, never pending."""

    status: InviteStatus

    @model_validator(mode="after")
    def not_pending(self):
        if self.status == InviteStatus.PENDING:
            raise ValueError("status must be 'accepted' or 'declined'")
        return self


class RSVPResponse(BaseModel):
    """Result of answering an invite."""

    event_id: UUID
    invite_id: UUID | None = None
    status: InviteStatus
    previous_status: InviteStatus | None = None
    confirmed: int = Field(default=0, ge=0)
    message: str


class DashboardEvent(BaseModel):
    """An upcoming event summarized for the coach dashboard."""

    id: UUID
    title: str
    team: str
    date: dt.date
    start_time: dt.time
    confirmed: int = 0
    total: int = 0
