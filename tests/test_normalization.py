"""Unit tests for the normalization layer.

Covers:
- Field projection for both source kinds
- Status translation and the pending default
- Position type derivation
- Fallback identifiers and raw payload side data
- Totality over odd input shapes
"""

import logging
from datetime import datetime, timezone

import pytest

from app.domain.models import PositionType, SourceKind
from app.normalization import UNKNOWN_POSITION, normalize, normalize_all
from app.normalization.service import DIRECT_APPLICATION_FIELDS, INTERNSHIP_ENTITY_FIELDS


@pytest.fixture
def direct_record():
    """Direct application as the applications API returns it."""
    return {
        "_id": "a1",
        "applicant_name": "Priya Sharma",
        "applicant_email": "priya@example.com",
        "phone": "+1-555-0100",
        "status": "reviewed",
        "application_type": "job",
        "job_id": {"_id": "job-7", "title": "Backend Engineer", "company": "Example Corp"},
        "created_date": "2024-01-01T09:00:00Z",
        "resume_url": "https://cdn.example.com/resumes/priya.pdf",
        "cover_letter": "Hello",
        "salary": "90k",
    }


@pytest.fixture
def internship_record():
    """Internship entity as the internships API returns it."""
    return {
        "_id": "b1",
        "title": "Backend Intern",
        "company": "Widgets Inc",
        "location": "Berlin",
        "posted_by": "recruiter@widgets.example",
        "duration": "3 months",
        "stipend_amount_min": 800,
        "status": "approved",
        "createdAt": "2024-02-01T08:00:00Z",
    }


class TestDirectApplicationNormalization:
    """Tests for direct-application records."""

    def test_canonical_fields(self, direct_record):
        """Test the full projection of a well-formed record."""
        application = normalize(direct_record, SourceKind.DIRECT_APPLICATION).application

        assert application.id == "a1"
        assert application.display_name == "Priya Sharma"
        assert application.position_title == "Backend Engineer"
        assert application.company_name == "Example Corp"
        assert application.position_type == PositionType.JOB
        assert application.status == "reviewing"
        assert application.created_at == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
        assert application.contact_email == "priya@example.com"
        assert application.contact_phone == "+1-555-0100"
        assert application.resume_url == "https://cdn.example.com/resumes/priya.pdf"
        assert application.cover_letter == "Hello"
        assert application.source_kind == SourceKind.DIRECT_APPLICATION

    def test_raw_payload_keeps_unconsumed_fields(self, direct_record):
        """Test that source-specific fields land in the side table."""
        result = normalize(direct_record, SourceKind.DIRECT_APPLICATION)

        assert result.raw_payload["salary"] == "90k"
        assert result.raw_payload["job_id"]["_id"] == "job-7"
        assert "applicant_name" not in result.raw_payload
        assert "status" not in result.raw_payload
        assert result.used_fallback_id is False

    def test_explicit_title_preferred(self, direct_record):
        """Test that a pre-joined title wins over the nested reference."""
        direct_record["title"] = "Staff Engineer"

        application = normalize(direct_record, SourceKind.DIRECT_APPLICATION).application

        assert application.position_title == "Staff Engineer"

    def test_title_from_internship_reference(self):
        record = {"_id": "a2", "internship_id": {"title": "Data Intern", "company": "Widgets Inc"}}

        application = normalize(record, SourceKind.DIRECT_APPLICATION).application

        assert application.position_title == "Data Intern"
        assert application.company_name == "Widgets Inc"
        assert application.position_type == PositionType.INTERNSHIP

    def test_unknown_position_sentinel(self):
        """Test the sentinel when no title is available."""
        application = normalize({"_id": "a3", "job_id": "job-7"}, SourceKind.DIRECT_APPLICATION).application

        assert application.position_title == UNKNOWN_POSITION

    def test_blank_values_skipped(self):
        """Test that empty strings do not count as present."""
        record = {"_id": "a4", "company_name": "  ", "job_id": {"company": "Example Corp"}}

        application = normalize(record, SourceKind.DIRECT_APPLICATION).application

        assert application.company_name == "Example Corp"

    def test_created_at_fallback_field(self):
        record = {"_id": "a5", "createdAt": "2024-05-01"}

        application = normalize(record, SourceKind.DIRECT_APPLICATION).application

        assert application.created_at == datetime(2024, 5, 1, tzinfo=timezone.utc)

    def test_unparseable_created_at_is_none(self):
        application = normalize({"_id": "a6", "created_date": "soon"}, SourceKind.DIRECT_APPLICATION).application

        assert application.created_at is None


class TestPositionType:
    """Tests for position type derivation on direct applications."""

    def test_internship_application_type(self):
        record = {"_id": "a1", "application_type": "Internship"}

        assert normalize(record, SourceKind.DIRECT_APPLICATION).application.position_type == PositionType.INTERNSHIP

    def test_other_application_type_is_job(self):
        record = {"_id": "a1", "application_type": "contract"}

        assert normalize(record, SourceKind.DIRECT_APPLICATION).application.position_type == PositionType.JOB

    def test_missing_application_type_defaults_to_job(self):
        assert normalize({"_id": "a1"}, SourceKind.DIRECT_APPLICATION).application.position_type == PositionType.JOB

    def test_internship_entities_are_always_internships(self):
        record = {"_id": "b1", "application_type": "job"}

        assert normalize(record, SourceKind.INTERNSHIP_ENTITY).application.position_type == PositionType.INTERNSHIP


class TestInternshipEntityNormalization:
    """Tests for internship-entity records."""

    def test_canonical_fields(self, internship_record):
        """Test poster fields standing in for applicant fields."""
        result = normalize(internship_record, SourceKind.INTERNSHIP_ENTITY)
        application = result.application

        assert application.id == "b1"
        assert application.display_name == "recruiter@widgets.example"
        assert application.position_title == "Backend Intern"
        assert application.company_name == "Widgets Inc"
        assert application.location == "Berlin"
        assert application.status == "approved"
        assert application.created_at == datetime(2024, 2, 1, 8, 0, tzinfo=timezone.utc)
        assert application.source_kind == SourceKind.INTERNSHIP_ENTITY
        assert result.raw_payload["duration"] == "3 months"
        assert result.raw_payload["stipend_amount_min"] == 800

    def test_student_name_preferred_over_poster(self, internship_record):
        internship_record["student_name"] = "Omar Haddad"

        application = normalize(internship_record, SourceKind.INTERNSHIP_ENTITY).application

        assert application.display_name == "Omar Haddad"

    def test_nested_poster_name(self):
        record = {"_id": "b2", "posted_by": {"name": "Ada Recruiter"}}

        application = normalize(record, SourceKind.INTERNSHIP_ENTITY).application

        assert application.display_name == "Ada Recruiter"

    def test_posted_at_fallback(self):
        record = {"_id": "b3", "postedAt": 1704067200000}

        application = normalize(record, SourceKind.INTERNSHIP_ENTITY).application

        assert application.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestStatusNormalization:
    """Tests for status translation during normalization."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("reviewed", "reviewing"), ("shortlisted", "interviewed"), ("hired", "accepted")],
    )
    def test_renamed_statuses(self, raw, expected):
        for source_kind in SourceKind:
            assert normalize({"_id": "x", "status": raw}, source_kind).application.status == expected

    @pytest.mark.parametrize("raw", ["pending", "rejected", "approved", "closed"])
    def test_other_statuses_pass_through(self, raw):
        assert normalize({"_id": "x", "status": raw}, SourceKind.DIRECT_APPLICATION).application.status == raw

    @pytest.mark.parametrize("record", [{"_id": "x"}, {"_id": "x", "status": None}, {"_id": "x", "status": ""}])
    def test_absent_status_is_pending(self, record):
        for source_kind in SourceKind:
            assert normalize(record, source_kind).application.status == "pending"


class TestTotality:
    """Tests that normalization never fails for a dict input."""

    @pytest.mark.parametrize(
        "record",
        [
            {},
            {"status": 3},
            {"_id": 42},
            {"_id": "", "title": None},
            {"job_id": None, "internship_id": "int-1"},
            {"created_date": True, "applicant_name": ["list"]},
            {"posted_by": {"email": "x@example.com"}, "company": {"name": "nested"}},
        ],
    )
    def test_odd_shapes(self, record):
        for source_kind in SourceKind:
            application = normalize(record, source_kind).application
            assert application.id
            assert application.status
            assert application.position_title

    @pytest.mark.parametrize("created_date", ["9999-12-31T23:00:00-05:00", "0001-01-01T00:00:00+01:00"])
    def test_timestamp_out_of_range_in_utc(self, created_date):
        """Test that a date that cannot be shifted to UTC is treated as missing."""
        application = normalize(
            {"_id": "x", "created_date": created_date}, SourceKind.DIRECT_APPLICATION
        ).application

        assert application.id == "x"
        assert application.created_at is None

    def test_missing_id_uses_payload_hash(self):
        """Test the deterministic fallback id for records without one."""
        record = {"title": "Backend Intern"}

        first = normalize(record, SourceKind.INTERNSHIP_ENTITY)
        second = normalize(dict(record), SourceKind.INTERNSHIP_ENTITY)

        assert first.used_fallback_id is True
        assert first.application.id.startswith("internship_entity:")
        assert first.application.id == second.application.id

    def test_numeric_id_stringified(self):
        assert normalize({"_id": 42}, SourceKind.DIRECT_APPLICATION).application.id == "42"

    def test_accepts_string_source_kind(self):
        assert normalize({"_id": "x"}, "internship_entity").source_kind == SourceKind.INTERNSHIP_ENTITY


class TestNormalizeAll:
    """Tests for batch normalization."""

    def test_preserves_order(self):
        records = [{"_id": "a"}, {"_id": "b"}, {"_id": "c"}]

        results = normalize_all(records, SourceKind.DIRECT_APPLICATION)

        assert [result.application.id for result in results] == ["a", "b", "c"]

    def test_empty(self):
        assert normalize_all([], SourceKind.INTERNSHIP_ENTITY) == []

    def test_unusable_record_skipped(self, caplog):
        """Test that a record that cannot be normalized is left out of the batch."""
        records = [{"_id": "a"}, "not-a-record", {"_id": "c"}]

        with caplog.at_level(logging.ERROR, logger="app.normalization.service"):
            results = normalize_all(records, SourceKind.DIRECT_APPLICATION)

        assert [result.application.id for result in results] == ["a", "c"]
        assert any(getattr(record, "event", None) == "normalization.record.failed" for record in caplog.records)


class TestFieldProjection:
    """Tests for projection bookkeeping."""

    def test_consumed_keys_exclude_nested_references(self):
        consumed = DIRECT_APPLICATION_FIELDS.consumed_keys()

        assert "applicant_name" in consumed
        assert "status" in consumed
        assert "job_id" not in consumed

    def test_internship_projection_has_fixed_type(self):
        assert INTERNSHIP_ENTITY_FIELDS.fixed_position_type == PositionType.INTERNSHIP
        assert DIRECT_APPLICATION_FIELDS.fixed_position_type is None
