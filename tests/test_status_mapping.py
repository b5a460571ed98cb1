"""Unit tests for the status vocabulary mapping."""

import pytest

from app.domain.status import (
    DEFAULT_STATUS,
    FROM_BACKEND,
    TO_BACKEND,
    CanonicalStatus,
    is_canonical,
    round_trips,
    to_backend,
    to_display,
)


class TestToDisplay:
    """Tests for backend-to-display mapping."""

    def test_renamed_backend_values(self):
        """Test the three backend values that are renamed for display."""
        assert to_display("reviewed") == "reviewing"
        assert to_display("shortlisted") == "interviewed"
        assert to_display("hired") == "accepted"

    def test_missing_or_blank_status_is_pending(self):
        """Test that absent statuses default to pending."""
        assert to_display(None) == "pending"
        assert to_display("") == "pending"
        assert to_display("   ") == "pending"
        assert DEFAULT_STATUS == CanonicalStatus.PENDING

    def test_other_values_pass_through(self):
        """Test that unknown and unrenamed values are returned unchanged."""
        assert to_display("pending") == "pending"
        assert to_display("rejected") == "rejected"
        assert to_display("approved") == "approved"
        assert to_display("Reviewed") == "Reviewed"


class TestToBackend:
    """Tests for display-to-backend mapping."""

    def test_renamed_display_values(self):
        """Test the inverse renames."""
        assert to_backend("reviewing") == "reviewed"
        assert to_backend("interviewed") == "shortlisted"
        assert to_backend("accepted") == "hired"

    def test_enum_members_accepted(self):
        """Test that CanonicalStatus members map like their string values."""
        assert to_backend(CanonicalStatus.REVIEWING) == "reviewed"

    def test_unchanged_values(self):
        """Test statuses stored under their own name."""
        assert to_backend("pending") == "pending"
        assert to_backend("rejected") == "rejected"

    def test_non_canonical_values_sent_verbatim(self):
        """Test that values outside the vocabulary are not touched."""
        assert to_backend("approved") == "approved"


class TestMappingTables:
    """Tests for completeness of the mapping tables."""

    def test_every_canonical_status_has_a_wire_value(self):
        """Test that TO_BACKEND covers the whole enum."""
        assert set(TO_BACKEND) == set(CanonicalStatus)

    def test_from_backend_inverts_to_backend(self):
        """Test that each renamed wire value maps back to a status writing it."""
        for wire, status in FROM_BACKEND.items():
            assert TO_BACKEND[status] == wire

    def test_round_trip_for_non_colliding_statuses(self):
        """Test statuses that survive a write and read unchanged."""
        for status in ("pending", "reviewing", "interviewed", "accepted", "rejected"):
            assert round_trips(status)
            assert to_display(to_backend(status)) == status

    def test_shortlisted_and_hired_collapse(self):
        """Test the two statuses sharing a wire value with another status."""
        assert not round_trips("shortlisted")
        assert to_display(to_backend("shortlisted")) == "interviewed"
        assert not round_trips("hired")
        assert to_display(to_backend("hired")) == "accepted"


class TestIsCanonical:
    """Tests for is_canonical."""

    @pytest.mark.parametrize("status", [status.value for status in CanonicalStatus])
    def test_members(self, status):
        assert is_canonical(status)

    def test_non_members(self):
        assert not is_canonical("approved")
        assert not is_canonical("reviewed")
        assert not is_canonical("")
