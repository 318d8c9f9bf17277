# =============================================================================
# app/websocket/__init__.py - WebSocket Module
# =============================================================================
# Provides real-time updates for team events.
#
# Usage:
#   # Broadcast to all connections for a team (inside the API process)
#   from app.websocket import websocket_manager
#   await websocket_manager.broadcast(team_id, {"type": "event_created", ...})
#
#   # Publish from anywhere (API handlers, Celery workers)
#   from app.websocket import publish_event_created
#   publish_event_created(team_id, event_row)
# =============================================================================

from app.websocket.manager import websocket_manager
from app.websocket.broadcast import (
    publish_event,
    publish_event_created,
    publish_invite_updated,
    WEBSOCKET_CHANNEL,
)

__all__ = [
    "websocket_manager",
    "publish_event",
    "publish_event_created",
    "publish_invite_updated",
    "WEBSOCKET_CHANNEL",
]
