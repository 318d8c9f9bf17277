# =============================================================================
# app/websocket/broadcast.py - Cross-Process Broadcasting
# =============================================================================
# Publishes team events that get broadcast to WebSocket clients.
#
# Uses Redis pub/sub for cross-process communication:
# - API handlers and Celery workers call publish_event()
# - Every API process subscribes and relays to its own WebSocket clients
#
# Events:
#   - event_created: A coach scheduled a new event for the team
#   - invite_updated: A player answered an event invite
# =============================================================================

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

# Redis channel for WebSocket events
WEBSOCKET_CHANNEL = "teammanager:websocket:events"


def get_redis_client():
    """Get a Redis client for pub/sub operations."""
    import redis
    from app.config import settings
    return redis.from_url(settings.REDIS_URL)


def publish_event(team_id: str, event_type: str, data: dict[str, Any]) -> bool:
    """
    Publish an event that will be broadcast to a team's WebSocket clients.

    Publishing is best effort: a Redis outage must not fail the request
    that triggered it.

    Returns:
        bool: True if published successfully
    """
    try:
        client = get_redis_client()

        message = json.dumps({
            "team_id": str(team_id),
            "type": event_type,
            **data
        }, default=str)

        client.publish(WEBSOCKET_CHANNEL, message)

        logger.debug(f"Published {event_type} event for team {team_id}")
        return True

    except Exception as e:
        logger.error(f"Failed to publish event: {e}")
        return False


def publish_event_created(team_id: str, event: dict[str, Any]) -> bool:
    """Publish an event_created message (mirrors the new events row)."""
    return publish_event(
        team_id=team_id,
        event_type="event_created",
        data={
            "event_id": event["id"],
            "title": event["title"],
            "date": event["date"],
            "start_time": event["start_time"],
            "end_time": event["end_time"],
            "event_type": event["type"],
        }
    )


def publish_invite_updated(
    team_id: str,
    event_id: str,
    status: str,
    confirmed: int,
) -> bool:
    """Publish an invite_updated message after a player answers."""
    return publish_event(
        team_id=team_id,
        event_type="invite_updated",
        data={
            "event_id": event_id,
            "status": status,
            "confirmed": confirmed,
        }
    )
