# =============================================================================
# core/services/invite_service.py - Invites & RSVP
# =============================================================================
# The RSVP flow:
#   1. Only users whose profile role is "player" may answer.
#   2. The answering player is the roster row with the user's email on the
#      event's team.
#   3. An existing invite for (event, player) is updated; otherwise one is
#      created with the answer.
#   4. The confirmed count is reconciled from the previous and new status.
#
# Counts are plain exact COUNT queries; there is no cached counter.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid
from core.models.event import InviteStatus
from core.models.profile import UserRole
from core.services.player_service import PlayerService
from core.services.profile_service import ProfileService
from app.exceptions import EventNotFoundError, NoPlayersForEmailError, NotAPlayerError

logger = logging.getLogger(__name__)


def reconcile_confirmed(
    confirmed: int,
    previous: InviteStatus | str | None,
    new: InviteStatus | str,
) -> int:
    """
    Adjust a confirmed-player count after one player changes their answer.

    Accepting adds one unless the player had already accepted; declining
    removes one only if they had accepted. Never goes below zero.
    """
    previous = InviteStatus(previous) if previous else None
    new = InviteStatus(new)

    if new == InviteStatus.ACCEPTED and previous != InviteStatus.ACCEPTED:
        confirmed += 1
    elif new != InviteStatus.ACCEPTED and previous == InviteStatus.ACCEPTED:
        confirmed -= 1
    return max(confirmed, 0)


class InviteService:
    """Service for event invites and player responses."""

    @staticmethod
    def count_confirmed(event_id: UUID | str) -> int:
        """Number of accepted invites for an event."""
        return SupabaseClient.count_rows(
            "invites",
            {"event_id": event_id, "status": InviteStatus.ACCEPTED.value},
        )

    @staticmethod
    def count_team_players(team_id: UUID | str) -> int:
        """Number of players on a team (the RSVP denominator)."""
        return SupabaseClient.count_rows("players", {"team_id": team_id})

    @staticmethod
    def get_invite(event_id: UUID | str, player_id: UUID | str) -> dict[str, Any] | None:
        """The invite for one player to one event, if any."""
        client = SupabaseClient.get_client()
        response = (
            client.table("invites")
            .select("id, status")
            .eq("event_id", normalize_uuid(event_id))
            .eq("player_id", normalize_uuid(player_id))
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    @staticmethod
    def invites_for_players(
        event_ids: list[str],
        player_ids: list[str],
    ) -> dict[str, dict[str, Any]]:
        """
        Map event_id -> invite for a set of events and players.

        If several of the players were invited to one event, the first
        invite returned wins.
        """
        if not event_ids or not player_ids:
            return {}

        client = SupabaseClient.get_client()
        response = (
            client.table("invites")
            .select("id, event_id, status")
            .in_("player_id", player_ids)
            .in_("event_id", event_ids)
            .execute()
        )

        by_event: dict[str, dict[str, Any]] = {}
        for invite in response.data or []:
            by_event.setdefault(str(invite["event_id"]), invite)
        return by_event

    @staticmethod
    def create_pending_invites(event_id: UUID | str, team_id: UUID | str) -> int:
        """
        Invite every current player of the team to the event.

        Returns:
            Number of invites created
        """
        players = PlayerService.list_players(team_id)
        if not players:
            return 0

        rows = [
            {
                "event_id": normalize_uuid(event_id),
                "player_id": player["id"],
                "status": InviteStatus.PENDING.value,
            }
            for player in players
        ]

        client = SupabaseClient.get_client()
        client.table("invites").insert(rows).execute()

        logger.info(f"Created {len(rows)} pending invites for event: {event_id}")
        return len(rows)

    @staticmethod
    def respond(
        event_id: UUID | str,
        user_id: UUID | str,
        email: str | None,
        status: InviteStatus,
    ) -> dict[str, Any]:
        """
        Record a player's answer to an event invite.

        Returns:
            Dict with event_id, invite_id, status, previous_status, confirmed

        Raises:
            NotAPlayerError: If the user's role isn't "player"
            EventNotFoundError: If the event doesn't exist
            NoPlayersForEmailError: If the user isn't on the event's team
        """
        role = ProfileService.get_role(user_id)
        if role != UserRole.PLAYER.value:
            raise NotAPlayerError(role)

        event = SupabaseClient.fetch_by_id("events", event_id)
        if not event:
            raise EventNotFoundError(str(event_id))

        player = PlayerService.find_on_team(email, event["team_id"])
        if not player:
            raise NoPlayersForEmailError(email)

        confirmed_before = InviteService.count_confirmed(event_id)
        existing = InviteService.get_invite(event_id, player["id"])
        previous = existing.get("status") if existing else None

        client = SupabaseClient.get_client()
        if existing:
            response = (
                client.table("invites")
                .update({"status": status.value})
                .eq("id", existing["id"])
                .execute()
            )
        else:
            response = (
                client.table("invites")
                .insert({
                    "event_id": normalize_uuid(event_id),
                    "player_id": player["id"],
                    "status": status.value,
                })
                .execute()
            )

        invite = response.data[0] if response.data else existing or {}

        logger.info(
            f"Player {player['id']} answered {status.value} to event {event_id} "
            f"(previously: {previous})"
        )

        return {
            "event_id": normalize_uuid(event_id),
            "team_id": event["team_id"],
            "player_id": player["id"],
            "invite_id": invite.get("id"),
            "status": status.value,
            "previous_status": previous,
            "confirmed": reconcile_confirmed(confirmed_before, previous, status),
        }
