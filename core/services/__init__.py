# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .team_service import TeamService
from .player_service import PlayerService
from .profile_service import ProfileService
from .invite_service import InviteService, reconcile_confirmed
from .event_service import EventService

__all__ = [
    "TeamService",
    "PlayerService",
    "ProfileService",
    "InviteService",
    "reconcile_confirmed",
    "EventService",
]
