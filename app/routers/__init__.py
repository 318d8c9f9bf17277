# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - teams.py: Team CRUD and the teams overview
# - players.py: Team rosters and player invites
# - events.py: Team schedules, the player event feed and RSVP
# - dashboard.py: Coach dashboard
# - profile.py: User profile
# - email.py: Transactional email and email configuration check
# - tasks.py: Background task status endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import teams
from . import players
from . import events
from . import dashboard
from . import profile
from . import email
from . import tasks

__all__ = [
    "health",
    "teams",
    "players",
    "events",
    "dashboard",
    "profile",
    "email",
    "tasks",
]
