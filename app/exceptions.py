# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error carries a machine-readable code and, where useful, a hint on
# how to fix the request.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class TeamManagerException(Exception):
    """
    Base exception for the Team Manager API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "TEAM_MANAGER_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Team Exceptions
# =============================================================================

class TeamNotFoundError(TeamManagerException):
    """Raised when a team ID doesn't exist."""

    def __init__(self, team_id: str):
        super().__init__(
            message=f"Team not found: {team_id}",
            code="TEAM_NOT_FOUND",
            status_code=404,
            suggestion="Check that the team_id is correct",
            details={"team_id": team_id}
        )


class DuplicateTeamNameError(TeamManagerException):
    """Raised when a team name collides with the unique constraint."""

    def __init__(self, name: str):
        super().__init__(
            message="A team with this name already exists",
            code="DUPLICATE_TEAM_NAME",
            status_code=409,
            suggestion="Choose a different team name",
            details={"name": name}
        )


class NotTeamAdminError(TeamManagerException):
    """Raised when a user tries to manage a team they don't administer."""

    def __init__(self, team_id: str):
        super().__init__(
            message=f"Only the team admin can modify team: {team_id}",
            code="NOT_TEAM_ADMIN",
            status_code=403,
            details={"team_id": team_id}
        )


# =============================================================================
# Player Exceptions
# =============================================================================

class PlayerNotFoundError(TeamManagerException):
    """Raised when a player ID doesn't exist (or belongs to another team)."""

    def __init__(self, player_id: str):
        super().__init__(
            message=f"Player not found: {player_id}",
            code="PLAYER_NOT_FOUND",
            status_code=404,
            suggestion="Check that the player_id is correct",
            details={"player_id": player_id}
        )


class NoPlayersForEmailError(TeamManagerException):
    """Raised when the signed-in user's email matches no player row."""

    def __init__(self, email: str | None):
        super().__init__(
            message="No players found for this email address",
            code="NO_PLAYERS_FOR_EMAIL",
            status_code=404,
            suggestion="Ask your coach to add you to a team with this email address",
            details={"email": email}
        )


class InvalidPlayersError(TeamManagerException):
    """Raised when a batch of new players has no usable rows."""

    def __init__(self):
        super().__init__(
            message="At least one player must have a name",
            code="INVALID_PLAYERS",
            status_code=400,
        )


class PlayerHasNoEmailError(TeamManagerException):
    """Raised when trying to email a player without an email address."""

    def __init__(self, player_id: str):
        super().__init__(
            message=f"Player has no email address: {player_id}",
            code="PLAYER_HAS_NO_EMAIL",
            status_code=400,
            suggestion="Add an email address to the player first",
            details={"player_id": player_id}
        )


# =============================================================================
# Event / Invite Exceptions
# =============================================================================

class EventNotFoundError(TeamManagerException):
    """Raised when an event ID doesn't exist."""

    def __init__(self, event_id: str):
        super().__init__(
            message=f"Event not found: {event_id}",
            code="EVENT_NOT_FOUND",
            status_code=404,
            suggestion="Check that the event_id is correct",
            details={"event_id": event_id}
        )


class InvalidEventTimeError(TeamManagerException):
    """Raised when an event would end before it starts."""

    def __init__(self, start_time: str, end_time: str):
        super().__init__(
            message="end_time must not be before start_time",
            code="INVALID_EVENT_TIME",
            status_code=400,
            details={"start_time": start_time, "end_time": end_time}
        )


class NotAPlayerError(TeamManagerException):
    """Raised when a user without the player role tries to RSVP."""

    def __init__(self, role: str | None):
        super().__init__(
            message="Only players can respond to event invitations",
            code="NOT_A_PLAYER",
            status_code=403,
            suggestion="Set your profile role to 'player' to respond to events",
            details={"role": role}
        )


# =============================================================================
# Email Exceptions
# =============================================================================

class EmailSendError(TeamManagerException):
    """Raised when the email provider rejects or fails a send."""

    def __init__(self, error: str | None = None):
        super().__init__(
            message="Failed to send invitation email",
            code="EMAIL_SEND_FAILED",
            status_code=500,
            suggestion="Check RESEND_API_KEY and the sender domain configuration",
            details={"error": error} if error else None
        )


class MissingEmailFieldsError(TeamManagerException):
    """Raised when an email request lacks required fields."""

    def __init__(self, missing: list[str]):
        super().__init__(
            message="Missing required fields",
            code="MISSING_FIELDS",
            status_code=400,
            details={"missing": missing}
        )


class UnsupportedEmailTypeError(TeamManagerException):
    """Raised for an email type the API doesn't know how to send."""

    def __init__(self, email_type: str | None):
        super().__init__(
            message="Unsupported email type",
            code="UNSUPPORTED_EMAIL_TYPE",
            status_code=400,
            suggestion="Supported types: player-invite",
            details={"type": email_type}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def team_manager_exception_handler(
    request: Request,
    exc: TeamManagerException
) -> JSONResponse:
    """
    Convert TeamManagerException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
