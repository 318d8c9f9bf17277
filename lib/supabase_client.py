# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides the few generic helpers every service needs:
# - Fetch a row by id (None when PostgREST reports "no rows")
# - Exact row counts for the RSVP aggregates
# - Classification of PostgREST / Postgres error codes
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   team = SupabaseClient.fetch_by_id("teams", team_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST: .single() matched zero (or many) rows
NOT_FOUND_CODE = "PGRST116"
# Postgres: unique_violation
UNIQUE_VIOLATION_CODE = "23505"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Error messages say how to fix the problem, not just what failed.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def _error_code(error: Exception) -> str | None:
    code = getattr(error, "code", None)
    return str(code) if code is not None else None


def is_not_found(error: Exception) -> bool:
    """True when the error is PostgREST's "no rows returned" for .single()."""
    return _error_code(error) == NOT_FOUND_CODE or NOT_FOUND_CODE in str(error)


def is_unique_violation(error: Exception) -> bool:
    """True when the error is a Postgres unique constraint violation."""
    return _error_code(error) == UNIQUE_VIOLATION_CODE or UNIQUE_VIOLATION_CODE in str(error)


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        team = SupabaseClient.fetch_by_id("teams", "550e8400-...")
        confirmed = SupabaseClient.count_rows(
            "invites", {"event_id": event_id, "status": "accepted"}
        )
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        Ownership checks are done by the service layer instead.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def set_client(cls, client: Client | None) -> None:
        """Replace the shared client (None resets to lazy creation)."""
        cls._instance = client

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_by_id(
        cls,
        table: str,
        row_id: str | UUID,
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch a single row by its primary key.

        Args:
            table: Table name
            row_id: The row UUID
            columns: PostgREST select expression (may embed relations,
                e.g. "*, teams(name)")

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails for another reason
        """
        client = cls.get_client()
        row_id_str = cls._normalize_uuid(row_id)

        try:
            response = (
                client.table(table)
                .select(columns)
                .eq("id", row_id_str)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if is_not_found(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_FAILED",
                suggestion=f"Check that the {table} table is accessible",
                details={"table": table, "id": row_id_str}
            )

    @classmethod
    def count_rows(
        cls,
        table: str,
        filters: dict[str, Any] | None = None,
    ) -> int:
        """
        Count rows matching equality filters.

        Uses an exact, head-only count so no rows are transferred.

        Args:
            table: Table name
            filters: Column -> value equality filters

        Returns:
            Number of matching rows (0 when the backend returns no count)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = client.table(table).select("id", count="exact", head=True)
            for column, value in (filters or {}).items():
                query = query.eq(column, cls._normalize_uuid(value))

            response = query.execute()
            return response.count or 0

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count {table} rows: {e}",
                code="COUNT_FAILED",
                details={"table": table, "filters": {k: str(v) for k, v in (filters or {}).items()}}
            )

    @classmethod
    def ping(cls) -> None:
        """Cheap query used by the readiness check."""
        cls.get_client().table("teams").select("id").limit(1).execute()
