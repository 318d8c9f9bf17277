# =============================================================================
# app/routers/email.py - Email Endpoints
# =============================================================================
# POST /email sends a transactional email right away (not queued) so the
# caller gets the provider's answer. GET /verify-email reports whether
# delivery is configured.
#
# Supported types:
#   - player-invite: data = {to, playerName, teamName}
# =============================================================================

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.auth import AuthUser, get_current_user
from app.exceptions import EmailSendError, MissingEmailFieldsError, UnsupportedEmailTypeError
from lib.email import send_player_invite, verify_email_config

logger = logging.getLogger(__name__)

router = APIRouter()

PLAYER_INVITE_FIELDS = ("to", "playerName", "teamName")


class EmailRequest(BaseModel):
    """
    Request to send an email.

    Example:
        {
            "type": "player-invite",
            "data": {"to": "alva@example.com", "playerName": "Alva", "teamName": "P14 Blue"}
        }
    """
    type: str
    data: dict[str, Any] = Field(default_factory=dict)


@router.post("/email")
async def send_email_endpoint(
    request: EmailRequest,
    user: AuthUser = Depends(get_current_user),
):
    """
    Send an email of the given type.

    Returns the send result; in development the email is simulated and
    the result carries a simulated id.
    """
    if request.type != "player-invite":
        raise UnsupportedEmailTypeError(request.type)

    missing = [field for field in PLAYER_INVITE_FIELDS if not request.data.get(field)]
    if missing:
        raise MissingEmailFieldsError(missing)

    logger.info(f"User {user.id} sending player invite to {request.data['to']}")

    result = send_player_invite(
        to=request.data["to"],
        player_name=request.data["playerName"],
        team_name=request.data["teamName"],
    )
    if not result.success:
        raise EmailSendError(result.error)

    return result.to_dict()


@router.get("/verify-email")
async def verify_email(user: AuthUser = Depends(get_current_user)):
    """Whether email delivery is configured, and the verified domains if so."""
    return verify_email_config()
