# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import date, datetime, timezone
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        team_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        team_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Date Utilities
# =============================================================================

def today_iso() -> str:
    """Today's date as YYYY-MM-DD (the format of events.date)."""
    return date.today().isoformat()


def utc_now_iso() -> str:
    """Current UTC timestamp in ISO-8601."""
    return datetime.now(timezone.utc).isoformat()


def event_sort_key(event: dict) -> tuple[str, str]:
    """
    Sort key for events: date first, then start time.

    Both are stored as zero-padded ISO strings, so string order is
    chronological order.
    """
    return (str(event.get("date") or ""), str(event.get("start_time") or ""))


def matches_search(player: dict, query: str) -> bool:
    """
    Check a player row against a free-text search.

    Name and email match case-insensitively; phone matches as typed.
    """
    if not query:
        return True
    needle = query.lower()
    name = (player.get("name") or "").lower()
    email = (player.get("email") or "").lower()
    phone = player.get("phone") or ""
    return needle in name or needle in email or query in phone
