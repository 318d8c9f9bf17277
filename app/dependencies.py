# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, Path

from app.auth import AuthUser, get_current_user
from core.services.team_service import TeamService


def get_admin_team(
    team_id: Annotated[UUID, Path(description="Team UUID")],
    user: AuthUser = Depends(get_current_user),
) -> dict[str, Any]:
    """
    Resolve the team in the path and require the caller to administer it.

    Raises 404 for unknown teams and 403 for other users' teams.
    """
    return TeamService.get_team_for_admin(team_id, user.id)


# Type alias for dependency injection
AdminTeamDep = Annotated[dict[str, Any], Depends(get_admin_team)]
