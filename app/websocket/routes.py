# =============================================================================
# app/websocket/routes.py - WebSocket Routes
# =============================================================================
# WebSocket endpoint for real-time team updates.
#
# Connect: ws://host/ws/teams/{team_id}?token={jwt}
#
# Events:
#   - {"type": "event_created", "event_id": "...", "title": "...", ...}
#   - {"type": "invite_updated", "event_id": "...", "status": "...", "confirmed": 7}
# =============================================================================

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, Query

from app.auth.dependencies import decode_token, get_current_user
from app.auth.models import AuthUser
from app.websocket.manager import websocket_manager
from core.services.player_service import PlayerService
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter()


def can_watch_team(team: dict, user_id: str, email: str | None) -> bool:
    """The team admin and the team's players may listen to its channel."""
    if str(team.get("admin_id")) == user_id:
        return True
    return PlayerService.find_on_team(email, team["id"]) is not None


@router.websocket("/ws/teams/{team_id}")
async def team_websocket(
    websocket: WebSocket,
    team_id: UUID,
    token: str = Query(..., description="JWT token for authentication")
):
    """
    WebSocket endpoint for real-time team updates.

    Authentication is required via the `token` query parameter.
    The user must administer the team or be on its roster.
    """
    # Broadcasts are keyed by the canonical lowercase form
    team_key = str(team_id)

    # 1. Verify JWT token
    try:
        user = decode_token(token)
    except HTTPException as e:
        logger.warning(f"WebSocket auth failed: {e.detail}")
        await websocket.close(code=4001, reason="Invalid token")
        return

    user_id = str(user.id)

    # 2. Verify access to the team
    try:
        team = SupabaseClient.fetch_by_id("teams", team_key)

        if not team:
            logger.warning(f"WebSocket: team {team_id} not found")
            await websocket.close(code=4004, reason="Team not found")
            return

        if not can_watch_team(team, user_id, user.email):
            logger.warning(f"WebSocket access denied: user {user_id} is not on team {team_id}")
            await websocket.close(code=4003, reason="Access denied")
            return

    except Exception as e:
        logger.error(f"WebSocket: error fetching team: {e}")
        await websocket.close(code=4000, reason="Server error")
        return

    # 3. Accept connection and add to manager
    await websocket_manager.connect(team_key, websocket)

    try:
        await websocket.send_json({
            "type": "connected",
            "team_id": team_key,
            "message": "Connected to team updates"
        })

        while True:
            try:
                data = await websocket.receive_text()

                # Keepalive
                if data == "ping":
                    await websocket.send_text("pong")
                else:
                    logger.debug(f"WebSocket received: {data[:100]}")

            except WebSocketDisconnect:
                raise
            except Exception as e:
                logger.warning(f"WebSocket receive error: {e}")
                break

    except WebSocketDisconnect:
        logger.info(f"WebSocket client disconnected from team {team_id}")
    finally:
        websocket_manager.disconnect(team_key, websocket)


@router.get("/ws/status")
async def websocket_status(user: AuthUser = Depends(get_current_user)):
    """Connection counts. Team IDs are not listed."""
    return {
        "total_connections": websocket_manager.get_connection_count(),
        "team_count": len(websocket_manager.get_active_teams())
    }
