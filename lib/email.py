# =============================================================================
# lib/email.py - Transactional Email Helper
# =============================================================================
# Sends templated HTML emails through the Resend REST API.
#
# Outside production-like setups (development, or no RESEND_API_KEY) nothing
# is sent: the message is logged and a simulated success is returned, so the
# rest of the app can be exercised locally without a verified sender domain.
#
# Senders never raise; they return an EmailResult the caller can inspect.
#
# Usage:
#   from lib.email import send_player_invite
#   result = send_player_invite(to="a@b.se", player_name="Alva", team_name="P14")
#   if not result.success:
#       ...
# =============================================================================

from __future__ import annotations

import html
import logging
import time
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import httpx

from app.config import settings

logger = logging.getLogger(__name__)


@dataclass
class EmailResult:
    """Outcome of a send attempt."""

    success: bool
    mode: str
    simulated_id: str | None = None
    email_data: dict[str, Any] | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success, "mode": self.mode}
        if self.simulated_id:
            result["simulated_id"] = self.simulated_id
        if self.email_data is not None:
            result["email_data"] = self.email_data
        if self.error:
            result["error"] = self.error
        return result


@dataclass
class EmailMessage:
    """A rendered email ready to hand to the provider."""

    to: str
    subject: str
    html: str
    tags: dict[str, str] = field(default_factory=dict)


# =============================================================================
# Templates
# =============================================================================

def render_event_invite(
    to: str,
    event_title: str,
    event_date: str,
    team_name: str,
) -> EmailMessage:
    """Build the invitation email for a scheduled event."""
    respond_url = f"{settings.APP_URL.rstrip('/')}/events/respond"
    body = f"""
        <h2>You're invited to {html.escape(event_title)}</h2>
        <p>Team: {html.escape(team_name)}</p>
        <p>Date: {html.escape(event_date)}</p>
        <a href="{html.escape(respond_url, quote=True)}">Respond to invite</a>
    """
    return EmailMessage(
        to=to,
        subject=f"Invitation: {event_title}",
        html=body,
        tags={"kind": "event-invite"},
    )


def render_player_invite(
    to: str,
    player_name: str,
    team_name: str,
) -> EmailMessage:
    """Build the welcome email sent when a player is added to a team."""
    register_url = f"{settings.APP_URL.rstrip('/')}/register?email={quote(to, safe='')}"
    team = html.escape(team_name)
    body = f"""
        <h2>Welcome to {team}!</h2>
        <p>Hi {html.escape(player_name)},</p>
        <p>You have been added as a player to the team "{team}" in Team Manager.</p>
        <p>You'll receive notifications about upcoming games, trainings, and other team events.</p>
        <p>If you haven't set up your account yet, you can do so by clicking the link below:</p>
        <a href="{html.escape(register_url, quote=True)}">Set up your account</a>
    """
    return EmailMessage(
        to=to,
        subject=f"You've been added to {team_name}",
        html=body,
        tags={"kind": "player-invite"},
    )


# =============================================================================
# Transport
# =============================================================================

def _resend_request(method: str, path: str, json: dict | None = None) -> dict[str, Any]:
    """Call the Resend API and return the decoded JSON body."""
    response = httpx.request(
        method,
        f"{settings.RESEND_API_URL.rstrip('/')}{path}",
        json=json,
        headers={"Authorization": f"Bearer {settings.RESEND_API_KEY}"},
        timeout=settings.EMAIL_TIMEOUT_SECONDS,
    )
    response.raise_for_status()
    return response.json()


def _current_mode() -> str:
    return settings.ENVIRONMENT


def send_email(message: EmailMessage) -> EmailResult:
    """
    Send a rendered email, or simulate it when email is disabled.

    Returns:
        EmailResult with success flag and mode ("development" when simulated)
    """
    logger.info(
        f"Sending {message.tags.get('kind', 'email')} to {message.to}: "
        f"'{message.subject}' (api key configured: {bool(settings.RESEND_API_KEY)}, "
        f"environment: {settings.ENVIRONMENT})"
    )

    if not settings.email_enabled:
        simulated_id = f"sim_{int(time.time() * 1000)}"
        logger.info(f"DEV MODE: email to {message.to} simulated as {simulated_id}")
        return EmailResult(success=True, mode="development", simulated_id=simulated_id)

    try:
        data = _resend_request(
            "POST",
            "/emails",
            json={
                "from": settings.EMAIL_FROM,
                "to": [message.to],
                "subject": message.subject,
                "html": message.html,
            },
        )
        logger.info(f"Resend API response: {data}")
        return EmailResult(success=True, mode="production", email_data=data)

    except Exception as e:
        logger.error(f"Failed to send email to {message.to}: {e}")
        return EmailResult(success=False, mode=_current_mode(), error=str(e))


def send_event_invite(
    to: str,
    event_title: str,
    event_date: str,
    team_name: str,
) -> EmailResult:
    """Send an event invitation to one player."""
    return send_email(render_event_invite(to, event_title, event_date, team_name))


def send_player_invite(
    to: str,
    player_name: str,
    team_name: str,
) -> EmailResult:
    """Send the "you've been added to a team" email to one player."""
    return send_email(render_player_invite(to, player_name, team_name))


def verify_email_config() -> dict[str, Any]:
    """
    Check whether email delivery is configured and the API key works.

    Returns:
        Dict with configured, apiKeyConfigured, environment and either
        message (simulation), domains (verified) or error (failure)
    """
    api_key_configured = bool(settings.RESEND_API_KEY)
    logger.info(
        f"Verifying email configuration (api key configured: {api_key_configured}, "
        f"environment: {settings.ENVIRONMENT})"
    )

    if not settings.email_enabled:
        return {
            "configured": False,
            "message": "Email will be simulated in development or because the API key is missing",
            "apiKeyConfigured": api_key_configured,
            "environment": settings.ENVIRONMENT,
        }

    try:
        domains = _resend_request("GET", "/domains")
        return {
            "configured": True,
            "apiKeyConfigured": True,
            "environment": settings.ENVIRONMENT,
            "domains": domains.get("data", []),
        }
    except Exception as e:
        logger.error(f"Error verifying email configuration: {e}")
        return {
            "configured": False,
            "error": str(e),
            "apiKeyConfigured": api_key_configured,
            "environment": settings.ENVIRONMENT,
        }
