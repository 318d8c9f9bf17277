# =============================================================================
# core/services/team_service.py - Team Business Logic
# =============================================================================
# Handles team CRUD and the admin-ownership check used by every coach
# operation on a team, its players and its events.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient, is_unique_violation
from lib.utils import matches_search, normalize_uuid
from core.models.team import TeamCreate, TeamUpdate
from app.exceptions import DuplicateTeamNameError, NotTeamAdminError, TeamNotFoundError

logger = logging.getLogger(__name__)


class TeamService:
    """
    Service for team management operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def create_team(admin_id: UUID | str, data: TeamCreate) -> dict[str, Any]:
        """
        Create a new team owned by admin_id.

        Raises:
            DuplicateTeamNameError: If the name is already taken
        """
        client = SupabaseClient.get_client()

        row = {
            "name": data.name,
            "description": data.description,
            "admin_id": normalize_uuid(admin_id),
        }

        try:
            response = client.table("teams").insert(row).execute()
        except Exception as e:
            if is_unique_violation(e):
                raise DuplicateTeamNameError(data.name)
            logger.error(f"Failed to create team: {e}")
            raise

        if not response.data:
            raise Exception("Insert returned no data")

        team = response.data[0]
        logger.info(f"Created team: {team['id']} ({team['name']}) for user: {admin_id}")
        return team

    @staticmethod
    def get_team(team_id: UUID | str) -> dict[str, Any]:
        """
        Get a team by ID.

        Raises:
            TeamNotFoundError: If team doesn't exist
        """
        team = SupabaseClient.fetch_by_id("teams", team_id)
        if not team:
            raise TeamNotFoundError(str(team_id))
        return team

    @staticmethod
    def get_team_for_admin(team_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """
        Get a team and verify user_id administers it.

        Raises:
            TeamNotFoundError: If team doesn't exist
            NotTeamAdminError: If the user is not the team admin
        """
        team = TeamService.get_team(team_id)
        if str(team.get("admin_id")) != str(user_id):
            raise NotTeamAdminError(str(team_id))
        return team

    @staticmethod
    def update_team(
        team_id: UUID | str,
        data: TeamUpdate,
        user_id: UUID | str,
    ) -> dict[str, Any]:
        """
        Rename or re-describe a team.

        Raises:
            TeamNotFoundError, NotTeamAdminError, DuplicateTeamNameError
        """
        team = TeamService.get_team_for_admin(team_id, user_id)

        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return team  # Nothing to update

        client = SupabaseClient.get_client()
        try:
            response = (
                client.table("teams")
                .update(update_data)
                .eq("id", normalize_uuid(team_id))
                .execute()
            )
        except Exception as e:
            if is_unique_violation(e):
                raise DuplicateTeamNameError(update_data.get("name", team["name"]))
            logger.error(f"Failed to update team: {e}")
            raise

        logger.info(f"Updated team: {team_id}")
        return response.data[0] if response.data else {**team, **update_data}

    @staticmethod
    def delete_team(team_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """Delete a team the user administers. Returns the deleted row."""
        team = TeamService.get_team_for_admin(team_id, user_id)

        client = SupabaseClient.get_client()
        client.table("teams").delete().eq("id", normalize_uuid(team_id)).execute()

        logger.info(f"Deleted team: {team_id}")
        return team

    @staticmethod
    def list_admin_teams(
        user_id: UUID | str,
        newest_first: bool = False,
    ) -> list[dict[str, Any]]:
        """
        Teams administered by user_id.

        Ordered by name, or by creation date (newest first) for the dashboard.
        """
        client = SupabaseClient.get_client()
        query = client.table("teams").select("*").eq("admin_id", normalize_uuid(user_id))
        if newest_first:
            query = query.order("created_at", desc=True)
        else:
            query = query.order("name")
        return query.execute().data or []

    @staticmethod
    def list_teams_with_players(
        user_id: UUID | str,
        search: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Teams overview: every team of the user with its roster.

        When search is given, each roster is narrowed to matching players;
        teams themselves are always kept.
        """
        teams = TeamService.list_admin_teams(user_id)
        if not teams:
            return []

        client = SupabaseClient.get_client()
        players = (
            client.table("players")
            .select("*")
            .in_("team_id", [team["id"] for team in teams])
            .order("name")
            .execute()
        ).data or []

        by_team: dict[str, list[dict[str, Any]]] = {}
        for player in players:
            if search and not matches_search(player, search):
                continue
            by_team.setdefault(str(player["team_id"]), []).append(player)

        return [
            {**team, "players": by_team.get(str(team["id"]), [])}
            for team in teams
        ]
