# =============================================================================
# app/websocket/manager.py - WebSocket Connection Manager
# =============================================================================
# Manages WebSocket connections per team and handles broadcasting.
#
# Usage:
#   from app.websocket import websocket_manager
#
#   await websocket_manager.connect(team_id, websocket)
#   await websocket_manager.broadcast(team_id, {"type": "event_created", ...})
#   websocket_manager.disconnect(team_id, websocket)
# =============================================================================

import logging
from typing import Dict, Set
from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Manages WebSocket connections organized by team ID.

    Each team channel can have many listeners (the coach, every player,
    multiple browser tabs). Events for a team go to all of them.
    """

    def __init__(self):
        # team_id -> set of WebSocket connections
        self.connections: Dict[str, Set[WebSocket]] = {}
        self._total_connections = 0

    async def connect(self, team_id: str, websocket: WebSocket) -> None:
        """Accept a new WebSocket connection and track it."""
        await websocket.accept()

        self.connections.setdefault(team_id, set()).add(websocket)
        self._total_connections += 1

        logger.info(
            f"WebSocket connected to team {team_id}. "
            f"Total connections: {self._total_connections}"
        )

    def disconnect(self, team_id: str, websocket: WebSocket) -> None:
        """Remove a WebSocket connection from tracking."""
        sockets = self.connections.get(team_id)
        if sockets and websocket in sockets:
            sockets.discard(websocket)
            self._total_connections -= 1

            if not sockets:
                del self.connections[team_id]

        logger.info(
            f"WebSocket disconnected from team {team_id}. "
            f"Total connections: {self._total_connections}"
        )

    async def broadcast(self, team_id: str, message: dict) -> int:
        """
        Broadcast a message to all connections watching a team.

        Returns:
            int: Number of clients the message was sent to
        """
        if team_id not in self.connections:
            logger.debug(f"No connections for team {team_id}, skipping broadcast")
            return 0

        dead_connections: Set[WebSocket] = set()
        sent_count = 0

        for websocket in list(self.connections[team_id]):
            try:
                await websocket.send_json(message)
                sent_count += 1
            except Exception as e:
                logger.warning(f"Failed to send to WebSocket: {e}")
                dead_connections.add(websocket)

        for ws in dead_connections:
            self.connections[team_id].discard(ws)
            self._total_connections -= 1

        if dead_connections:
            logger.info(f"Cleaned up {len(dead_connections)} dead connections")

        if team_id in self.connections and not self.connections[team_id]:
            del self.connections[team_id]

        logger.debug(
            f"Broadcast to team {team_id}: "
            f"type={message.get('type')}, sent to {sent_count} clients"
        )

        return sent_count

    def get_connection_count(self, team_id: str | None = None) -> int:
        """Number of active connections, for one team or in total."""
        if team_id:
            return len(self.connections.get(team_id, set()))
        return self._total_connections

    def get_active_teams(self) -> list[str]:
        """Team IDs with at least one connection."""
        return list(self.connections.keys())


# Global singleton instance
websocket_manager = ConnectionManager()
