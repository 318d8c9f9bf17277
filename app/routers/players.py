# =============================================================================
# app/routers/players.py - Player Roster Endpoints
# =============================================================================
# Mounted under /api/v1/teams/{team_id}/players.
# Every endpoint requires the caller to administer the team.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path
from pydantic import BaseModel

from app.dependencies import AdminTeamDep
from app.notifications import queue_player_invites
from core.models.player import PlayerBatchCreate, PlayerResponse, PlayerUpdate
from core.services.player_service import PlayerService

router = APIRouter()

PlayerId = Annotated[UUID, Path(description="Player UUID")]


class PlayersAddedResponse(BaseModel):
    """Response after adding a batch of players."""
    players: list[PlayerResponse]
    invites_queued: int
    message: str


@router.get("/{team_id}/players", response_model=list[PlayerResponse])
async def list_players(team: AdminTeamDep):
    """Players of the team, ordered by name."""
    return PlayerService.list_players(team["id"])


@router.post("/{team_id}/players", response_model=PlayersAddedResponse, status_code=201)
async def add_players(team: AdminTeamDep, request: PlayerBatchCreate):
    """
    Add several players at once.

    Rows with an empty name are ignored; at least one row must have a
    name. With `send_invites`, every new player with an email gets a
    welcome email in the background.
    """
    players = PlayerService.add_players(team["id"], request.players)

    task_ids = []
    if request.send_invites:
        task_ids = queue_player_invites(players, team["name"])

    return PlayersAddedResponse(
        players=players,
        invites_queued=len(task_ids),
        message=f"Added {len(players)} player(s)",
    )


@router.get("/{team_id}/players/{player_id}", response_model=PlayerResponse)
async def get_player(team: AdminTeamDep, player_id: PlayerId):
    """Get one player of the team."""
    return PlayerService.get_player(player_id, team_id=team["id"])


@router.patch("/{team_id}/players/{player_id}", response_model=PlayerResponse)
async def update_player(team: AdminTeamDep, player_id: PlayerId, request: PlayerUpdate):
    """Edit a player's name, email, phone or birth year."""
    return PlayerService.update_player(player_id, team["id"], request)


@router.delete("/{team_id}/players/{player_id}")
async def delete_player(team: AdminTeamDep, player_id: PlayerId):
    """Remove a player from the team."""
    player = PlayerService.delete_player(player_id, team["id"])
    return {
        "player_id": player["id"],
        "message": "Player deleted successfully",
    }


@router.post("/{team_id}/players/{player_id}/invite")
async def resend_invite(team: AdminTeamDep, player_id: PlayerId):
    """
    Send the welcome email to a player again.

    Sent synchronously so the coach sees whether it worked.
    Returns 400 if the player has no email address.
    """
    player = PlayerService.get_player(player_id, team_id=team["id"])
    result = PlayerService.send_invite(player, team.get("name"))
    return {
        "success": True,
        "player_id": player["id"],
        "mode": result.mode,
    }
