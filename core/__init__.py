# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for data validation
# - services/: Team, player, event, RSVP and profile operations
#
# Code in this package should NOT import from FastAPI or Celery.
# This keeps the logic testable and reusable.
# =============================================================================
