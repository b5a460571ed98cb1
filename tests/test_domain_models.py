"""Unit tests for domain models."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from app.domain.models import (
    ActorContext,
    ActorRole,
    NormalizedApplication,
    PositionType,
    SourceKind,
)
from app.domain.status import CanonicalStatus


def make_application(**overrides):
    fields = dict(
        id="a1",
        display_name="Priya Sharma",
        position_title="Backend Intern",
        company_name="Example Corp",
        position_type=PositionType.INTERNSHIP,
        source_kind=SourceKind.DIRECT_APPLICATION,
    )
    fields.update(overrides)
    return NormalizedApplication(**fields)


class TestNormalizedApplication:
    """Tests for NormalizedApplication model."""

    def test_defaults(self):
        """Test default values for optional fields."""
        application = make_application()

        assert application.status == "pending"
        assert application.created_at is None
        assert application.location == ""
        assert application.contact_email is None

    def test_empty_id_rejected(self):
        """Test that an empty id is invalid."""
        with pytest.raises(ValidationError):
            make_application(id="")

    def test_source_kind_required(self):
        """Test that every record carries an ownership tag."""
        with pytest.raises(ValidationError):
            NormalizedApplication(id="a1", position_type="job")

    def test_enum_status_stored_as_string(self):
        """Test that a CanonicalStatus member is stored as its plain value."""
        application = make_application(status=CanonicalStatus.REVIEWING)

        assert application.status == "reviewing"
        assert type(application.status) is str

    def test_non_canonical_status_kept(self):
        """Test that statuses outside the enum are allowed."""
        assert make_application(status="approved").status == "approved"

    def test_naive_created_at_treated_as_utc(self):
        """Test that a naive datetime is given the UTC zone."""
        application = make_application(created_at=datetime(2024, 1, 1, 9, 0))

        assert application.created_at.tzinfo == timezone.utc
        assert application.created_at.hour == 9

    def test_created_at_converted_to_utc(self):
        """Test that an aware datetime is converted to UTC."""
        plus_two = timezone(timedelta(hours=2))
        application = make_application(created_at=datetime(2024, 1, 1, 9, 0, tzinfo=plus_two))

        assert application.created_at.tzinfo == timezone.utc
        assert application.created_at.hour == 7

    def test_status_is_mutable(self):
        """Test that the status can be updated in place."""
        application = make_application()
        application.status = "rejected"

        assert application.status == "rejected"

    def test_source_kind_is_frozen(self):
        """Test that the ownership tag cannot be changed after creation."""
        application = make_application()

        with pytest.raises(ValidationError):
            application.source_kind = SourceKind.INTERNSHIP_ENTITY

        assert application.source_kind == SourceKind.DIRECT_APPLICATION


class TestActorContext:
    """Tests for ActorContext model."""

    def test_valid_actor(self):
        actor = ActorContext(role="recruiter", identity="  hr@example.com ")

        assert actor.role == ActorRole.RECRUITER
        assert actor.identity == "hr@example.com"
        assert actor.is_recruiter

    def test_applicant_is_not_recruiter(self):
        assert not ActorContext(role="applicant", identity="priya@example.com").is_recruiter

    def test_blank_identity_rejected(self):
        with pytest.raises(ValidationError):
            ActorContext(role="applicant", identity="   ")

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            ActorContext(role="admin", identity="root@example.com")

    def test_actor_is_immutable(self):
        actor = ActorContext(role="applicant", identity="priya@example.com")

        with pytest.raises(ValidationError):
            actor.role = ActorRole.RECRUITER
