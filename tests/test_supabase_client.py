# =============================================================================
# tests/test_supabase_client.py - Supabase Wrapper Tests
# =============================================================================
# This module contains tests for:
# - Error code classification
# - fetch_by_id (including embedded parents and "not found")
# - Exact counts
# =============================================================================

from unittest.mock import MagicMock

import pytest

from lib.supabase_client import (
    SupabaseClient,
    SupabaseClientError,
    is_not_found,
    is_unique_violation,
)


class CodedError(Exception):
    def __init__(self, code):
        super().__init__("boom")
        self.code = code


# =============================================================================
# Error classification
# =============================================================================

class TestErrorCodes:

    def test_not_found_by_code(self):
        assert is_not_found(CodedError("PGRST116"))
        assert not is_not_found(CodedError("23505"))

    def test_not_found_by_message(self):
        assert is_not_found(Exception("{'code': 'PGRST116', 'message': 'no rows'}"))

    def test_unique_violation(self):
        assert is_unique_violation(CodedError("23505"))
        assert is_unique_violation(Exception('duplicate key (code 23505)'))
        assert not is_unique_violation(Exception("timeout"))


# =============================================================================
# Reads
# =============================================================================

class TestFetchById:

    def test_returns_row(self, fake_db, team):
        assert SupabaseClient.fetch_by_id("teams", team["id"])["name"] == "P14 Blue"

    def test_missing_row_is_none(self, fake_db):
        assert SupabaseClient.fetch_by_id("teams", "00000000-0000-0000-0000-000000000000") is None

    def test_embedded_parent(self, fake_db, event):
        row = SupabaseClient.fetch_by_id("events", event["id"], columns="*, teams(name)")
        assert row["teams"] == {"name": "P14 Blue"}

    def test_other_errors_wrapped(self):
        client = MagicMock()
        client.table.return_value.select.return_value.eq.return_value.single.return_value.execute.side_effect = (
            CodedError("42P01")
        )
        SupabaseClient.set_client(client)
        try:
            with pytest.raises(SupabaseClientError) as exc_info:
                SupabaseClient.fetch_by_id("teams", "abc")
            assert exc_info.value.code == "FETCH_FAILED"
        finally:
            SupabaseClient.set_client(None)


class TestCountRows:

    def test_counts_with_filters(self, fake_db, team, players):
        assert SupabaseClient.count_rows("players", {"team_id": team["id"]}) == 3
        assert SupabaseClient.count_rows("players", {"team_id": "other"}) == 0

    def test_missing_count_is_zero(self):
        client = MagicMock()
        client.table.return_value.select.return_value.execute.return_value = MagicMock(count=None)
        SupabaseClient.set_client(client)
        try:
            assert SupabaseClient.count_rows("teams") == 0
        finally:
            SupabaseClient.set_client(None)
