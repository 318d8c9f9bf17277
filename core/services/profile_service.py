# =============================================================================
# core/services/profile_service.py - User Profile Logic
# =============================================================================
# Profiles are optional: a user who never saved one still gets a usable
# profile built from their auth identity and, when their email is on a
# roster, their player row.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid, utc_now_iso
from core.models.profile import ProfileUpdate, UserRole

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for reading and saving user profiles."""

    @staticmethod
    def get_profile_row(user_id: UUID | str) -> dict[str, Any] | None:
        """The raw profiles row, or None if the user never saved one."""
        return SupabaseClient.fetch_by_id("profiles", user_id)

    @staticmethod
    def get_role(user_id: UUID | str) -> str | None:
        """The user's role, or None without a profile."""
        profile = ProfileService.get_profile_row(user_id)
        return profile.get("role") if profile else None

    @staticmethod
    def get_profile(user_id: UUID | str, email: str | None) -> dict[str, Any]:
        """
        Build the merged profile for a user.

        Precedence: profiles row, then the first player row with the
        user's email (only fills name/phone gaps), then defaults.
        """
        profile: dict[str, Any] = {
            "id": normalize_uuid(user_id),
            "email": email or "",
            "name": "",
            "phone": "",
            "role": UserRole.PLAYER.value,
            "avatar_url": None,
            "updated_at": None,
        }

        row = ProfileService.get_profile_row(user_id)
        if row:
            for key in ("name", "phone", "role", "avatar_url", "updated_at"):
                if row.get(key):
                    profile[key] = row[key]

        if email and (not profile["name"] or not profile["phone"]):
            client = SupabaseClient.get_client()
            players = (
                client.table("players")
                .select("name, phone")
                .eq("email", email)
                .limit(1)
                .execute()
            ).data or []
            if players:
                profile["name"] = profile["name"] or players[0].get("name") or ""
                profile["phone"] = profile["phone"] or players[0].get("phone") or ""

        return profile

    @staticmethod
    def save_profile(
        user_id: UUID | str,
        email: str | None,
        data: ProfileUpdate,
    ) -> dict[str, Any]:
        """Create or update the user's profile row, then return the merged view."""
        client = SupabaseClient.get_client()
        row = {
            "id": normalize_uuid(user_id),
            "name": data.name,
            "phone": data.phone,
            "role": data.role.value,
            "avatar_url": data.avatar_url,
            "updated_at": utc_now_iso(),
        }

        try:
            client.table("profiles").upsert(row, on_conflict="id").execute()
        except Exception as e:
            logger.error(f"Failed to save profile for {user_id}: {e}")
            raise

        logger.info(f"Saved profile for user: {user_id} (role: {data.role.value})")
        return ProfileService.get_profile(user_id, email)
