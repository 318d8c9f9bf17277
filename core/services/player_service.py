# =============================================================================
# core/services/player_service.py - Player Business Logic
# =============================================================================
# Handles the team roster: batch add, edit, delete, lookup by email, and
# (re)sending the "you've been added" email.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.email import EmailResult, send_player_invite
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid
from core.models.player import PlayerInput, PlayerUpdate
from app.exceptions import (
    EmailSendError,
    InvalidPlayersError,
    PlayerHasNoEmailError,
    PlayerNotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_TEAM_NAME = "Your Team"


class PlayerService:
    """Service for player roster operations."""

    @staticmethod
    def list_players(team_id: UUID | str) -> list[dict[str, Any]]:
        """Players of a team, ordered by name."""
        client = SupabaseClient.get_client()
        response = (
            client.table("players")
            .select("*")
            .eq("team_id", normalize_uuid(team_id))
            .order("name")
            .execute()
        )
        return response.data or []

    @staticmethod
    def prepare_rows(team_id: UUID | str, players: list[PlayerInput]) -> list[dict[str, Any]]:
        """
        Turn form rows into insertable player rows.

        Rows without a name are dropped; names are trimmed.

        Raises:
            InvalidPlayersError: If no row has a name
        """
        rows = []
        for player in players:
            name = player.name.strip()
            if not name:
                continue
            rows.append({
                "team_id": normalize_uuid(team_id),
                "name": name,
                "email": str(player.email) if player.email else None,
                "phone": player.phone,
                "birth_year": player.birth_year,
            })

        if not rows:
            raise InvalidPlayersError()
        return rows

    @staticmethod
    def add_players(team_id: UUID | str, players: list[PlayerInput]) -> list[dict[str, Any]]:
        """
        Insert a batch of players into a team.

        Returns:
            The inserted rows (with generated ids)

        Raises:
            InvalidPlayersError: If no row has a name
        """
        rows = PlayerService.prepare_rows(team_id, players)

        client = SupabaseClient.get_client()
        try:
            response = client.table("players").insert(rows).execute()
        except Exception as e:
            logger.error(f"Failed to add players to team {team_id}: {e}")
            raise

        inserted = response.data or []
        logger.info(f"Added {len(inserted)} players to team: {team_id}")
        return inserted

    @staticmethod
    def get_player(player_id: UUID | str, team_id: UUID | str | None = None) -> dict[str, Any]:
        """
        Get a player by ID, optionally checking it belongs to team_id.

        Raises:
            PlayerNotFoundError: If the player doesn't exist or is on another team
        """
        player = SupabaseClient.fetch_by_id("players", player_id)
        if not player:
            raise PlayerNotFoundError(str(player_id))
        if team_id is not None and str(player.get("team_id")) != str(team_id):
            raise PlayerNotFoundError(str(player_id))
        return player

    @staticmethod
    def update_player(
        player_id: UUID | str,
        team_id: UUID | str,
        data: PlayerUpdate,
    ) -> dict[str, Any]:
        """Update name, email, phone or birth year of a player."""
        player = PlayerService.get_player(player_id, team_id=team_id)

        update_data = data.model_dump(exclude_unset=True)
        if "email" in update_data and update_data["email"] is not None:
            update_data["email"] = str(update_data["email"])
        if not update_data:
            return player

        client = SupabaseClient.get_client()
        response = (
            client.table("players")
            .update(update_data)
            .eq("id", normalize_uuid(player_id))
            .execute()
        )

        logger.info(f"Updated player: {player_id}")
        return response.data[0] if response.data else {**player, **update_data}

    @staticmethod
    def delete_player(player_id: UUID | str, team_id: UUID | str) -> dict[str, Any]:
        """Remove a player from a team. Returns the deleted row."""
        player = PlayerService.get_player(player_id, team_id=team_id)

        client = SupabaseClient.get_client()
        client.table("players").delete().eq("id", normalize_uuid(player_id)).execute()

        logger.info(f"Deleted player: {player_id} from team: {team_id}")
        return player

    @staticmethod
    def find_by_email(email: str | None) -> list[dict[str, Any]]:
        """All player rows (one per team) registered with this email."""
        if not email:
            return []
        client = SupabaseClient.get_client()
        response = (
            client.table("players")
            .select("*")
            .eq("email", email)
            .execute()
        )
        return response.data or []

    @staticmethod
    def find_on_team(email: str | None, team_id: UUID | str) -> dict[str, Any] | None:
        """The player row for this email on one team, if any."""
        for player in PlayerService.find_by_email(email):
            if str(player.get("team_id")) == str(team_id):
                return player
        return None

    @staticmethod
    def send_invite(player: dict[str, Any], team_name: str | None) -> EmailResult:
        """
        Email a player that they've been added to a team.

        Raises:
            PlayerHasNoEmailError: If the player has no email address
            EmailSendError: If the provider reports a failure
        """
        if not player.get("email"):
            raise PlayerHasNoEmailError(str(player.get("id")))

        result = send_player_invite(
            to=player["email"],
            player_name=player.get("name") or "",
            team_name=team_name or DEFAULT_TEAM_NAME,
        )

        if not result.success:
            logger.error(f"Error sending player invite to {player['email']}: {result.error}")
            raise EmailSendError(result.error)

        logger.info(f"Player invite sent to {player['email']} ({result.mode})")
        return result
