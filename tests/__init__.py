# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the TeamManager API:
# - Model, utility and email helper unit tests
# - Service tests against an in-memory Supabase (see conftest.py)
# - API, auth, realtime and background task tests
#
# Run tests with: pytest
# =============================================================================
