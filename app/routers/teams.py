# =============================================================================
# app/routers/teams.py - Team CRUD Endpoints
# =============================================================================
# Coaches create and manage their teams here.
# All endpoints require authentication; mutations require team ownership.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import AuthUser, get_current_user
from app.dependencies import AdminTeamDep
from core.models.team import TeamCreate, TeamResponse, TeamUpdate, TeamWithPlayers
from core.services.team_service import TeamService

router = APIRouter()


@router.get("", response_model=list[TeamWithPlayers])
async def list_teams(
    user: AuthUser = Depends(get_current_user),
    q: Annotated[str | None, Query(max_length=100, description="Filter players by name, email or phone")] = None,
):
    """
    List the caller's teams with their players.

    Teams are ordered by name and players by name. With `q`, each roster
    only contains matching players.
    """
    return TeamService.list_teams_with_players(user.id, search=q)


@router.post("", response_model=TeamResponse, status_code=201)
async def create_team(
    request: TeamCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a new team. The caller becomes its admin.

    Returns 409 if the name is already taken.
    """
    return TeamService.create_team(user.id, request)


@router.get("/{team_id}", response_model=TeamResponse)
async def get_team(team: AdminTeamDep):
    """Get a team the caller administers."""
    return team


@router.patch("/{team_id}", response_model=TeamResponse)
async def update_team(
    team_id: Annotated[UUID, Path(description="Team UUID")],
    request: TeamUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """Rename a team or change its description."""
    return TeamService.update_team(team_id, request, user_id=user.id)


@router.delete("/{team_id}")
async def delete_team(
    team_id: Annotated[UUID, Path(description="Team UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """Delete a team the caller administers."""
    team = TeamService.delete_team(team_id, user_id=user.id)
    return {
        "team_id": team["id"],
        "message": "Team deleted successfully",
    }
