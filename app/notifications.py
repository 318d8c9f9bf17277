# =============================================================================
# app/notifications.py - Queueing Outgoing Email
# =============================================================================
# Thin helpers the routers use to hand email work to Celery.
#
# The database write that triggered the email has already happened when
# these run, so a broker outage is logged and reported as "not queued"
# rather than failing the request.
# =============================================================================

import logging
from typing import Any

logger = logging.getLogger(__name__)


def queue_event_invites(event_id: str) -> str | None:
    """
    Queue invitation emails for an event.

    Returns:
        Celery task ID, or None if the task couldn't be queued
    """
    try:
        from workers.tasks import send_event_invites

        result = send_event_invites.delay(str(event_id))
        logger.info(f"Queued event invites for {event_id}: task {result.id}")
        return result.id

    except Exception as e:
        logger.error(f"Failed to queue event invites for {event_id}. Is Redis running? Error: {e}")
        return None


def queue_player_invites(players: list[dict[str, Any]], team_name: str) -> list[str]:
    """
    Queue a welcome email for every player that has an email address.

    Returns:
        Celery task IDs of the queued emails
    """
    task_ids = []
    try:
        from workers.tasks import send_player_invite

        for player in players:
            if not player.get("email"):
                continue
            result = send_player_invite.delay(str(player["id"]), team_name)
            task_ids.append(result.id)

    except Exception as e:
        logger.error(f"Failed to queue player invites. Is Redis running? Error: {e}")

    logger.info(f"Queued {len(task_ids)} player invite(s) for team {team_name}")
    return task_ids
