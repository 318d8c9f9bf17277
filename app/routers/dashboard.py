# =============================================================================
# app/routers/dashboard.py - Coach Dashboard
# =============================================================================
# One call for the coach's landing page: their teams (newest first) and
# the next few events across those teams with RSVP counts.
# =============================================================================

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.auth import AuthUser, get_current_user
from app.config import settings
from core.models.event import DashboardEvent
from core.models.team import TeamResponse
from core.services.event_service import EventService
from core.services.team_service import TeamService

router = APIRouter()


class DashboardResponse(BaseModel):
    """Teams and upcoming events for the coach dashboard."""
    teams: list[TeamResponse]
    upcoming_events: list[DashboardEvent]


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(user: AuthUser = Depends(get_current_user)):
    """
    Dashboard data for the current coach.

    upcoming_events holds at most DASHBOARD_EVENT_LIMIT events from today
    on, each with confirmed (accepted invites) and total (team size).
    """
    teams = TeamService.list_admin_teams(user.id, newest_first=True)
    events = EventService.upcoming_for_teams(teams, limit=settings.DASHBOARD_EVENT_LIMIT)
    return DashboardResponse(teams=teams, upcoming_events=events)
