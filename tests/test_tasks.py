# =============================================================================
# tests/test_tasks.py - Background Email Task Tests
# =============================================================================
# Task bodies are run in-process (task.run) against the in-memory database;
# the email transport is mocked.
# =============================================================================

import uuid
from unittest.mock import patch

import pytest

from app.config import settings
from app.exceptions import EmailSendError
from lib.email import EmailResult
from workers.celery_app import celery_app
from workers.config import EMAIL_QUEUE, email_time_limits
from workers.tasks import format_event_when, send_event_invites, send_player_invite

OK = EmailResult(success=True, mode="development", simulated_id="sim_1")
FAILED = EmailResult(success=False, mode="production", error="rate limited")


class TestFormatEventWhen:

    def test_date_and_minutes(self):
        assert format_event_when({"date": "2025-03-04", "start_time": "18:00:00"}) == "2025-03-04 18:00"

    def test_missing_time(self):
        assert format_event_when({"date": "2025-03-04", "start_time": None}) == "2025-03-04"


class TestSendEventInvites:

    def test_emails_players_with_email(self, fake_db, event, players):
        with patch("lib.email.send_event_invite", return_value=OK) as send:
            result = send_event_invites.run(event["id"])

        assert result == {
            "success": True,
            "event_id": event["id"],
            "sent": 2,
            "failed": 0,
            "skipped": 1,
        }
        recipients = {call.kwargs["to"] for call in send.call_args_list}
        assert recipients == {"alva@example.com", "ebba@example.com"}
        assert send.call_args.kwargs["team_name"] == "P14 Blue"
        assert send.call_args.kwargs["event_date"].endswith("18:00")

    def test_failures_counted(self, fake_db, event, players):
        with patch("lib.email.send_event_invite", side_effect=[OK, FAILED]):
            result = send_event_invites.run(event["id"])

        assert result["success"] is False
        assert result["sent"] == 1
        assert result["failed"] == 1

    def test_missing_event(self, fake_db):
        result = send_event_invites.run(str(uuid.uuid4()))
        assert result["success"] is False


class TestSendPlayerInvite:

    def test_looks_up_team_name(self, fake_db, players):
        with patch("core.services.player_service.send_player_invite", return_value=OK) as send:
            result = send_player_invite.run(players[0]["id"])

        assert result == {"success": True, "player_id": players[0]["id"], "mode": "development"}
        assert send.call_args.kwargs["team_name"] == "P14 Blue"

    def test_player_without_email_skipped(self, fake_db, players):
        result = send_player_invite.run(players[2]["id"], "P14 Blue")
        assert result["skipped"] is True

    def test_missing_player(self, fake_db):
        assert send_player_invite.run(str(uuid.uuid4()))["success"] is False

    def test_provider_failure_retries(self, fake_db, players):
        """Called directly, Task.retry re-raises the original error."""
        with patch("core.services.player_service.send_player_invite", return_value=FAILED):
            with pytest.raises(EmailSendError):
                send_player_invite.run(players[0]["id"], "P14 Blue")


# =============================================================================
# Worker Configuration
# =============================================================================

class TestCeleryConfig:

    def test_time_limits_scale_with_email_timeout(self):
        soft, hard = email_time_limits(10.0, sends=50)
        assert soft == 501
        assert hard == soft + 30

    def test_email_tasks_routed_to_email_queue(self):
        routes = celery_app.conf.task_routes
        assert routes["workers.tasks.send_event_invites"] == {"queue": EMAIL_QUEUE}
        assert routes["workers.tasks.send_player_invite"] == {"queue": EMAIL_QUEUE}
        assert celery_app.conf.task_default_queue == EMAIL_QUEUE

    def test_broker_from_settings(self):
        assert celery_app.conf.broker_url == settings.REDIS_URL
        assert celery_app.conf.result_backend == settings.REDIS_URL
        assert celery_app.conf.task_time_limit > celery_app.conf.task_soft_time_limit
