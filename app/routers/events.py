# =============================================================================
# app/routers/events.py - Event & RSVP Endpoints
# =============================================================================
# Two routers:
# - team_router: A coach's schedule, mounted under /api/v1/teams
# - router: What players see and answer, mounted at /api/v1/events
#
# Creating an event and answering an invite both publish a realtime
# message to the team channel.
# =============================================================================

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel

from app.auth import AuthUser, get_current_user
from app.dependencies import AdminTeamDep
from app.notifications import queue_event_invites
from app.websocket import publish_event_created, publish_invite_updated
from core.models.event import (
    EventCreate,
    EventDetail,
    EventResponse,
    EventUpdate,
    InviteStatus,
    PlayerEvent,
    RSVPRequest,
    RSVPResponse,
)
from core.services.event_service import EventService
from core.services.invite_service import InviteService

logger = logging.getLogger(__name__)

team_router = APIRouter()
router = APIRouter()

EventId = Annotated[UUID, Path(description="Event UUID")]

RSVP_MESSAGES = {
    InviteStatus.ACCEPTED: "See you there!",
    InviteStatus.DECLINED: "Thanks for letting the coach know.",
}


class EventCreatedResponse(EventResponse):
    """A newly scheduled event and what happened to its invites."""
    invite_count: int = 0
    task_id: str | None = None


# =============================================================================
# Coach: team schedule
# =============================================================================

@team_router.get("/{team_id}/events", response_model=list[EventResponse])
async def list_team_events(
    team: AdminTeamDep,
    upcoming_only: Annotated[bool, Query(description="Only events from today on")] = False,
):
    """The team's events, ordered by date and start time."""
    return EventService.list_team_events(team["id"], upcoming_only=upcoming_only)


@team_router.post("/{team_id}/events", response_model=EventCreatedResponse, status_code=201)
async def create_event(team: AdminTeamDep, request: EventCreate):
    """
    Schedule an event for the team.

    With `send_invites` (the default) every player gets a pending invite
    and an invitation email is queued. Connected team members are
    notified over the WebSocket.
    """
    event = EventService.create_event(team["id"], request)

    task_id = None
    if request.send_invites and event["invite_count"]:
        task_id = queue_event_invites(event["id"])

    publish_event_created(team["id"], event)

    return EventCreatedResponse(**event, task_id=task_id)


@team_router.patch("/{team_id}/events/{event_id}", response_model=EventResponse)
async def update_event(team: AdminTeamDep, event_id: EventId, request: EventUpdate):
    """Change an event's details."""
    return EventService.update_event(event_id, team["id"], request)


@team_router.delete("/{team_id}/events/{event_id}")
async def delete_event(team: AdminTeamDep, event_id: EventId):
    """Cancel an event. Its invites are removed with it."""
    event = EventService.delete_event(event_id, team["id"])
    return {
        "event_id": event["id"],
        "message": "Event deleted successfully",
    }


# =============================================================================
# Player: feed, detail, RSVP
# =============================================================================

@router.get("", response_model=list[PlayerEvent])
async def list_my_events(user: AuthUser = Depends(get_current_user)):
    """
    Upcoming events of every team the caller plays on.

    Each event carries the caller's invite status, if they have one.
    Returns 404 if the caller's email isn't on any roster.
    """
    return EventService.list_player_events(user.email)


@router.get("/{event_id}", response_model=EventDetail)
async def get_event(event_id: EventId, user: AuthUser = Depends(get_current_user)):
    """Event detail with confirmed and total player counts."""
    return EventService.get_event_detail(event_id, user.email)


@router.post("/{event_id}/respond", response_model=RSVPResponse)
async def respond_to_event(
    event_id: EventId,
    request: RSVPRequest,
    user: AuthUser = Depends(get_current_user),
):
    """
    Accept or decline an event invitation.

    Only users with the player role can answer. Answering again changes
    the previous answer.
    """
    result = InviteService.respond(event_id, user.id, user.email, request.status)

    publish_invite_updated(
        team_id=result["team_id"],
        event_id=result["event_id"],
        status=result["status"],
        confirmed=result["confirmed"],
    )

    return RSVPResponse(
        event_id=result["event_id"],
        invite_id=result["invite_id"],
        status=result["status"],
        previous_status=result["previous_status"],
        confirmed=result["confirmed"],
        message=RSVP_MESSAGES[request.status],
    )
