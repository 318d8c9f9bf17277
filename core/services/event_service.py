# =============================================================================
# core/services/event_service.py - Event Business Logic
# =============================================================================
# Handles scheduling (coach side) and the event views players see:
# - Team schedule CRUD
# - A player's upcoming events across all their teams, with their RSVP
# - Event detail with confirmed / total player counts
# - Upcoming events for the coach dashboard
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import event_sort_key, normalize_uuid, today_iso
from core.models.event import EventCreate, EventUpdate
from core.services.invite_service import InviteService
from core.services.player_service import PlayerService
from app.exceptions import EventNotFoundError, InvalidEventTimeError, NoPlayersForEmailError

logger = logging.getLogger(__name__)

UNKNOWN_TEAM = "Unknown team"
EVENT_WITH_TEAM = "*, teams(name)"


def _team_name(event: dict[str, Any]) -> str:
    team = event.get("teams") or {}
    return team.get("name") or UNKNOWN_TEAM


def to_player_event(event: dict[str, Any], invite: dict[str, Any] | None) -> dict[str, Any]:
    """Flatten an event row (with embedded team) and the player's invite."""
    return {
        "id": event["id"],
        "title": event["title"],
        "team": _team_name(event),
        "team_id": event["team_id"],
        "date": event["date"],
        "start_time": event["start_time"],
        "end_time": event["end_time"],
        "type": event["type"],
        "location": event.get("location") or "",
        "description": event.get("description") or "",
        "invite_status": invite.get("status") if invite else None,
        "invite_id": invite.get("id") if invite else None,
    }


class EventService:
    """Service for event scheduling and player event views."""

    # -------------------------------------------------------------------------
    # Coach operations
    # -------------------------------------------------------------------------

    @staticmethod
    def create_event(team_id: UUID | str, data: EventCreate) -> dict[str, Any]:
        """
        Schedule an event for a team.

        When data.send_invites is set, a pending invite is created for each
        current player. Emailing is left to the caller.

        Returns:
            Created event row, plus "invite_count"
        """
        client = SupabaseClient.get_client()

        try:
            response = client.table("events").insert(data.to_row(normalize_uuid(team_id))).execute()
        except Exception as e:
            logger.error(f"Failed to create event: {e}")
            raise

        if not response.data:
            raise Exception("Insert returned no data")

        event = response.data[0]
        logger.info(f"Created event: {event['id']} ({event['title']}) for team: {team_id}")

        invite_count = 0
        if data.send_invites:
            invite_count = InviteService.create_pending_invites(event["id"], team_id)

        return {**event, "invite_count": invite_count}

    @staticmethod
    def get_event(event_id: UUID | str, with_team: bool = False) -> dict[str, Any]:
        """
        Get an event by ID.

        Raises:
            EventNotFoundError: If the event doesn't exist
        """
        event = SupabaseClient.fetch_by_id(
            "events", event_id, columns=EVENT_WITH_TEAM if with_team else "*"
        )
        if not event:
            raise EventNotFoundError(str(event_id))
        return event

    @staticmethod
    def get_team_event(event_id: UUID | str, team_id: UUID | str) -> dict[str, Any]:
        """Get an event and check it belongs to team_id."""
        event = EventService.get_event(event_id)
        if str(event.get("team_id")) != str(team_id):
            raise EventNotFoundError(str(event_id))
        return event

    @staticmethod
    def list_team_events(
        team_id: UUID | str,
        upcoming_only: bool = False,
    ) -> list[dict[str, Any]]:
        """A team's schedule ordered by date, then start time."""
        client = SupabaseClient.get_client()
        query = client.table("events").select("*").eq("team_id", normalize_uuid(team_id))
        if upcoming_only:
            query = query.gte("date", today_iso())
        events = query.order("date").order("start_time").execute().data or []
        return sorted(events, key=event_sort_key)

    @staticmethod
    def update_event(
        event_id: UUID | str,
        team_id: UUID | str,
        data: EventUpdate,
    ) -> dict[str, Any]:
        """
        Change an event's details.

        Raises:
            EventNotFoundError: If the event isn't on this team
            InvalidEventTimeError: If the resulting end time precedes the start time
        """
        event = EventService.get_team_event(event_id, team_id)

        update_data = data.to_row()
        if not update_data:
            return event

        start = update_data.get("start_time", event.get("start_time"))
        end = update_data.get("end_time", event.get("end_time"))
        if start and end and str(end) < str(start):
            raise InvalidEventTimeError(str(start), str(end))

        client = SupabaseClient.get_client()
        response = (
            client.table("events")
            .update(update_data)
            .eq("id", normalize_uuid(event_id))
            .execute()
        )

        logger.info(f"Updated event: {event_id}")
        return response.data[0] if response.data else {**event, **update_data}

    @staticmethod
    def delete_event(event_id: UUID | str, team_id: UUID | str) -> dict[str, Any]:
        """Delete an event and its invites. Returns the deleted row."""
        event = EventService.get_team_event(event_id, team_id)
        event_id_str = normalize_uuid(event_id)

        client = SupabaseClient.get_client()
        client.table("invites").delete().eq("event_id", event_id_str).execute()
        client.table("events").delete().eq("id", event_id_str).execute()

        logger.info(f"Deleted event: {event_id}")
        return event

    # -------------------------------------------------------------------------
    # Player views
    # -------------------------------------------------------------------------

    @staticmethod
    def list_player_events(email: str | None) -> list[dict[str, Any]]:
        """
        Upcoming events (today or later) for every team the email plays on.

        Raises:
            NoPlayersForEmailError: If the email is on no roster
        """
        players = PlayerService.find_by_email(email)
        if not players:
            raise NoPlayersForEmailError(email)

        team_ids = list({str(player["team_id"]) for player in players})
        player_ids = [str(player["id"]) for player in players]

        client = SupabaseClient.get_client()
        events = (
            client.table("events")
            .select(EVENT_WITH_TEAM)
            .in_("team_id", team_ids)
            .gte("date", today_iso())
            .order("date")
            .execute()
        ).data or []

        invites = InviteService.invites_for_players(
            [str(event["id"]) for event in events],
            player_ids,
        )

        result = [to_player_event(event, invites.get(str(event["id"]))) for event in events]
        result.sort(key=event_sort_key)

        logger.debug(f"Fetched {len(result)} upcoming events for {email}")
        return result

    @staticmethod
    def get_event_detail(event_id: UUID | str, email: str | None) -> dict[str, Any]:
        """
        Event page data: the event, the caller's RSVP (if they're on the
        team), confirmed = accepted invites, total = players on the team.

        Raises:
            EventNotFoundError: If the event doesn't exist
        """
        event = EventService.get_event(event_id, with_team=True)

        invite = None
        player = PlayerService.find_on_team(email, event["team_id"])
        if player:
            invite = InviteService.get_invite(event["id"], player["id"])

        detail = to_player_event(event, invite)
        detail["confirmed"] = InviteService.count_confirmed(event["id"])
        detail["total"] = InviteService.count_team_players(event["team_id"])
        return detail

    # -------------------------------------------------------------------------
    # Dashboard
    # -------------------------------------------------------------------------

    @staticmethod
    def upcoming_for_teams(
        teams: list[dict[str, Any]],
        limit: int = 5,
    ) -> list[dict[str, Any]]:
        """
        Next events across the given teams with confirmed/total counts.
        """
        if not teams:
            return []

        names = {str(team["id"]): team.get("name") or UNKNOWN_TEAM for team in teams}

        client = SupabaseClient.get_client()
        events = (
            client.table("events")
            .select("*")
            .in_("team_id", list(names))
            .gte("date", today_iso())
            .order("date")
            .order("start_time")
            .limit(limit)
            .execute()
        ).data or []

        # Team size is the same for every event of a team
        totals: dict[str, int] = {}
        summaries = []
        for event in sorted(events, key=event_sort_key)[:limit]:
            team_id = str(event["team_id"])
            if team_id not in totals:
                totals[team_id] = InviteService.count_team_players(team_id)
            summaries.append({
                "id": event["id"],
                "title": event["title"],
                "team": names.get(team_id, UNKNOWN_TEAM),
                "date": event["date"],
                "start_time": event["start_time"],
                "confirmed": InviteService.count_confirmed(event["id"]),
                "total": totals[team_id],
            })
        return summaries
