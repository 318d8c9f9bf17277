# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - email.py: Templated transactional email (Resend)
# - utils.py: Shared utilities (UUID normalization, dates, search)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import (
    SupabaseClient,
    SupabaseClientError,
    is_not_found,
    is_unique_violation,
)
from lib.email import (
    EmailMessage,
    EmailResult,
    send_event_invite,
    send_player_invite,
    verify_email_config,
)
from lib.utils import normalize_uuid

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    "is_not_found",
    "is_unique_violation",
    # Email
    "EmailMessage",
    "EmailResult",
    "send_event_invite",
    "send_player_invite",
    "verify_email_config",
    # Utils
    "normalize_uuid",
]
