# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the API models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Rows are serialized the way the database stores them
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from datetime import date, time
from uuid import uuid4

import pytest
from pydantic import ValidationError

from core.models import (
    EventCreate,
    EventDetail,
    EventType,
    EventUpdate,
    InviteStatus,
    PlayerBatchCreate,
    PlayerInput,
    PlayerUpdate,
    ProfileUpdate,
    RSVPRequest,
    TeamCreate,
    TeamUpdate,
    UserRole,
)


# =============================================================================
# Team Model Tests
# =============================================================================

class TestTeamCreate:
    """Tests for TeamCreate model."""

    def test_name_is_trimmed(self):
        team = TeamCreate(name="  P14 Blue  ")
        assert team.name == "P14 Blue"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            TeamCreate(name="   ")

    def test_empty_description_becomes_none(self):
        team = TeamCreate(name="P14 Blue", description="")
        assert team.description is None

    def test_update_without_fields_is_empty(self):
        assert TeamUpdate().model_dump(exclude_unset=True) == {}

    def test_update_null_name_rejected(self):
        with pytest.raises(ValidationError):
            TeamUpdate(name=None)

    def test_update_null_description_allowed(self):
        assert TeamUpdate(description=None).model_dump(exclude_unset=True) == {"description": None}


# =============================================================================
# Player Model Tests
# =============================================================================

class TestPlayerInput:
    """Tests for PlayerInput and PlayerBatchCreate."""

    def test_blank_email_and_phone_become_none(self):
        player = PlayerInput(name="Alva", email="", phone="  ")
        assert player.email is None
        assert player.phone is None

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            PlayerInput(name="Alva", email="not-an-email")

    def test_birth_year_range(self):
        with pytest.raises(ValidationError):
            PlayerInput(name="Alva", birth_year=1800)

    def test_blank_name_row_allowed(self):
        """Half-filled forms are accepted; the service drops blank rows."""
        batch = PlayerBatchCreate(players=[{"name": "Alva"}, {"name": ""}])
        assert len(batch.players) == 2
        assert batch.send_invites is True

    def test_empty_batch_rejected(self):
        with pytest.raises(ValidationError):
            PlayerBatchCreate(players=[])


class TestPlayerUpdate:
    """Tests for PlayerUpdate."""

    def test_blank_email_and_phone_clear_them(self):
        update = PlayerUpdate(email="", phone=" ")
        assert update.model_dump(exclude_unset=True) == {"email": None, "phone": None}

    def test_null_name_rejected(self):
        with pytest.raises(ValidationError):
            PlayerUpdate(name=None)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            PlayerUpdate(name="  ")


# =============================================================================
# Event Model Tests
# =============================================================================

class TestEventCreate:
    """Tests for EventCreate model."""

    def _data(self, **overrides):
        data = {
            "title": "Training",
            "date": "2025-03-04",
            "start_time": "18:00",
            "end_time": "19:30",
        }
        data.update(overrides)
        return data

    def test_defaults(self):
        event = EventCreate(**self._data())
        assert event.type == EventType.TRAINING
        assert event.send_invites is True
        assert event.date == date(2025, 3, 4)
        assert event.start_time == time(18, 0)

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError):
            EventCreate(**self._data(start_time="19:00", end_time="18:00"))

    def test_equal_start_and_end_allowed(self):
        event = EventCreate(**self._data(start_time="18:00", end_time="18:00"))
        assert event.start_time == event.end_time

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            EventCreate(**self._data(type="party"))

    def test_to_row(self):
        team_id = str(uuid4())
        row = EventCreate(**self._data(type="match", location="Arena")).to_row(team_id)

        assert row == {
            "team_id": team_id,
            "title": "Training",
            "date": "2025-03-04",
            "start_time": "18:00:00",
            "end_time": "19:30:00",
            "type": "match",
            "location": "Arena",
            "description": None,
        }


class TestEventUpdate:
    """Tests for EventUpdate.to_row."""

    def test_only_set_fields(self):
        row = EventUpdate(title="Match day", type="match").to_row()
        assert row == {"title": "Match day", "type": "match"}

    def test_dates_and_times_serialized(self):
        row = EventUpdate(date="2025-05-01", end_time="20:15").to_row()
        assert row == {"date": "2025-05-01", "end_time": "20:15:00"}

    @pytest.mark.parametrize("field", ["title", "date", "start_time", "end_time", "type"])
    def test_null_required_field_rejected(self, field):
        with pytest.raises(ValidationError):
            EventUpdate(**{field: None})

    def test_null_location_clears_it(self):
        assert EventUpdate(location=None).to_row() == {"location": None}


class TestEventDetail:
    """Tests for EventDetail defaults."""

    def test_optional_invite_and_counts(self):
        detail = EventDetail(
            id=uuid4(),
            title="Training",
            team="P14 Blue",
            team_id=uuid4(),
            date="2025-03-04",
            start_time="18:00",
            end_time="19:30",
            type="training",
        )
        assert detail.invite_status is None
        assert detail.confirmed == 0
        assert detail.total == 0
        assert detail.location == ""


# =============================================================================
# RSVP & Profile Model Tests
# =============================================================================

class TestRSVPRequest:
    """Players answer with accepted or declined only."""

    @pytest.mark.parametrize("status", ["accepted", "declined"])
    def test_final_answers_accepted(self, status):
        assert RSVPRequest(status=status).status == InviteStatus(status)

    def test_pending_rejected(self):
        with pytest.raises(ValidationError):
            RSVPRequest(status="pending")

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            RSVPRequest(status="maybe")


class TestProfileUpdate:
    """Tests for ProfileUpdate."""

    def test_defaults(self):
        profile = ProfileUpdate()
        assert profile.role == UserRole.PLAYER
        assert profile.name == ""

    def test_all_roles(self):
        roles = {ProfileUpdate(role=role).role.value for role in ("coach", "player", "admin", "parent")}
        assert roles == {"coach", "player", "admin", "parent"}

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            ProfileUpdate(role="referee")
