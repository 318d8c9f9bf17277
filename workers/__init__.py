# =============================================================================
# workers/ - Celery Background Task Workers
# =============================================================================
# This package contains the Celery configuration and task definitions for
# sending invitation emails outside the request cycle.
#
# Components:
# - celery_app.py: Celery application configuration
# - tasks.py: Task definitions (event invites, player welcome emails)
# - config.py: Worker-specific settings
#
# Usage:
#   # Start worker
#   celery -A workers.celery_app worker --loglevel=info
#
#   # Submit task (from API)
#   from workers.tasks import send_event_invites
#   result = send_event_invites.delay(event_id)
# =============================================================================

from .celery_app import celery_app
from . import tasks

__all__ = [
    "celery_app",
    "tasks",
]
