# =============================================================================
# workers/config.py - Celery Worker Configuration
# =============================================================================
# Settings for the email workers. All email tasks run on one dedicated
# queue, and their time limits scale with the email API timeout.
# =============================================================================

from app.config import settings

# Queue consumed by the email workers (see scripts/start_worker.py)
EMAIL_QUEUE = "email"

# Largest roster one send_event_invites run is budgeted for
MAX_SENDS_PER_TASK = 50


def email_time_limits(timeout_seconds: float, sends: int = MAX_SENDS_PER_TASK) -> tuple[int, int]:
    """
    Soft and hard time limits for an email task.

    Every send may take up to timeout_seconds; the hard limit leaves
    the task 30 seconds to log and return after the soft one fires.

    Returns:
        (soft_limit, hard_limit) in whole seconds
    """
    soft = int(timeout_seconds * sends) + 1
    return soft, soft + 30


class CeleryConfig:
    """
    Celery configuration settings.

    These are applied to the Celery app via app.config_from_object().
    """

    # -------------------------------------------------------------------------
    # Broker Settings (Redis)
    # -------------------------------------------------------------------------

    broker_url = settings.REDIS_URL
    result_backend = settings.REDIS_URL
    broker_connection_retry_on_startup = True

    # -------------------------------------------------------------------------
    # Routing
    # -------------------------------------------------------------------------

    task_default_queue = EMAIL_QUEUE
    task_routes = {
        "workers.tasks.send_event_invites": {"queue": EMAIL_QUEUE},
        "workers.tasks.send_player_invite": {"queue": EMAIL_QUEUE},
    }

    # -------------------------------------------------------------------------
    # Task Settings
    # -------------------------------------------------------------------------

    # Acknowledge after the task completes so a crashed worker's job is redelivered
    task_acks_late = True

    # Report STARTED so /tasks/{id} can show "Sending..."
    task_track_started = True

    # Only prefetch one task at a time
    worker_prefetch_multiplier = 1

    task_soft_time_limit, task_time_limit = email_time_limits(settings.EMAIL_TIMEOUT_SECONDS)

    # Coaches may check on an invite run well after creating the event
    result_expires = 86400

    task_serializer = "json"
    result_serializer = "json"
    accept_content = ["json"]
