# =============================================================================
# workers/tasks.py - Celery Task Definitions
# =============================================================================
# Defines background tasks for outgoing email.
#
# Tasks:
# - send_event_invites: Email every player of a team about a new event
# - send_player_invite: Email one player that they were added to a team
# =============================================================================

import logging
from typing import Any

from celery import shared_task

logger = logging.getLogger(__name__)

EMAIL_MAX_RETRIES = 3
EMAIL_RETRY_DELAY = 30  # seconds


def format_event_when(event: dict[str, Any]) -> str:
    """Date and start time as shown in the invitation, e.g. 2025-03-04 18:00."""
    start = str(event.get("start_time") or "")[:5]
    return f"{event.get('date')} {start}".strip()


@shared_task(bind=True, name="workers.tasks.send_event_invites")
def send_event_invites(self, event_id: str) -> dict[str, Any]:
    """
    Email an invitation for an event to every player on its team.

    Players without an email address are skipped. A failed send is
    counted, not retried, so players who already got the email don't
    get it twice.

    Returns:
        Dict with success, event_id, sent, failed, skipped
    """
    from core.services.player_service import PlayerService
    from lib.email import send_event_invite
    from lib.supabase_client import SupabaseClient

    logger.info(f"Sending invites for event {event_id}")

    event = SupabaseClient.fetch_by_id("events", event_id, columns="*, teams(name)")
    if not event:
        return {
            "success": False,
            "event_id": event_id,
            "error": f"Event not found: {event_id}",
        }

    team_name = (event.get("teams") or {}).get("name") or "Your Team"
    when = format_event_when(event)

    sent = failed = skipped = 0
    for player in PlayerService.list_players(event["team_id"]):
        if not player.get("email"):
            skipped += 1
            continue

        result = send_event_invite(
            to=player["email"],
            event_title=event["title"],
            event_date=when,
            team_name=team_name,
        )
        if result.success:
            sent += 1
        else:
            failed += 1
            logger.warning(f"Invite to {player['email']} for event {event_id} failed: {result.error}")

    logger.info(f"Event {event_id} invites: {sent} sent, {failed} failed, {skipped} skipped")

    return {
        "success": failed == 0,
        "event_id": event_id,
        "sent": sent,
        "failed": failed,
        "skipped": skipped,
    }


@shared_task(
    bind=True,
    name="workers.tasks.send_player_invite",
    max_retries=EMAIL_MAX_RETRIES,
    default_retry_delay=EMAIL_RETRY_DELAY,
)
def send_player_invite(self, player_id: str, team_name: str | None = None) -> dict[str, Any]:
    """
    Email one player that they've been added to a team.

    Retries on provider failure.

    Returns:
        Dict with success, player_id and the send mode (or skipped)
    """
    from core.services.player_service import PlayerService
    from app.exceptions import EmailSendError, PlayerHasNoEmailError, PlayerNotFoundError

    try:
        player = PlayerService.get_player(player_id)
    except PlayerNotFoundError:
        return {"success": False, "player_id": player_id, "error": "Player not found"}

    if team_name is None:
        from lib.supabase_client import SupabaseClient
        team = SupabaseClient.fetch_by_id("teams", player["team_id"], columns="name")
        team_name = team.get("name") if team else None

    try:
        result = PlayerService.send_invite(player, team_name)
    except PlayerHasNoEmailError:
        return {"success": True, "player_id": player_id, "skipped": True}
    except EmailSendError as e:
        raise self.retry(exc=e)

    return {"success": True, "player_id": player_id, "mode": result.mode}
