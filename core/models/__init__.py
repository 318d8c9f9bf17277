# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - team.py: Team CRUD schemas
# - player.py: Player roster schemas
# - event.py: Event scheduling, invite and RSVP schemas
# - profile.py: User profile schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Player Models
# -----------------------------------------------------------------------------
from .player import (
    PlayerBatchCreate,
    PlayerInput,
    PlayerResponse,
    PlayerUpdate,
)

# -----------------------------------------------------------------------------
# Team Models
# -----------------------------------------------------------------------------
from .team import (
    TeamCreate,
    TeamResponse,
    TeamUpdate,
    TeamWithPlayers,
)

# -----------------------------------------------------------------------------
# Event Models - Scheduling and RSVP
# -----------------------------------------------------------------------------
from .event import (
    DashboardEvent,
    EventCreate,
    EventDetail,
    EventResponse,
    EventType,
    EventUpdate,
    InviteStatus,
    PlayerEvent,
    RSVPRequest,
    RSVPResponse,
)

# -----------------------------------------------------------------------------
# Profile Models
# -----------------------------------------------------------------------------
from .profile import (
    ProfileResponse,
    ProfileUpdate,
    UserRole,
)

__all__ = [
    # Player
    "PlayerBatchCreate",
    "PlayerInput",
    "PlayerResponse",
    "PlayerUpdate",
    # Team
    "TeamCreate",
    "TeamResponse",
    "TeamUpdate",
    "TeamWithPlayers",
    # Event
    "DashboardEvent",
    "EventCreate",
    "EventDetail",
    "EventResponse",
    "EventType",
    "EventUpdate",
    "InviteStatus",
    "PlayerEvent",
    "RSVPRequest",
    "RSVPResponse",
    # Profile
    "ProfileResponse",
    "ProfileUpdate",
    "UserRole",
]
