"""Unit tests for timestamp utilities."""

from datetime import datetime, timedelta, timezone

import pytest

from app.utils.timestamps import (
    coerce_timestamp,
    ensure_utc,
    format_timestamp,
    parse_iso_datetime,
    utc_now,
)


class TestUtcNow:
    """Tests for utc_now function."""

    def test_utc_now_returns_utc_datetime(self):
        """Test that utc_now returns a timezone-aware datetime in UTC."""
        now = utc_now()

        assert now.tzinfo == timezone.utc

    def test_utc_now_is_recent(self):
        """Test that utc_now returns the current time."""
        before = datetime.now(timezone.utc)
        now = utc_now()
        after = datetime.now(timezone.utc)

        assert before <= now <= after


class TestEnsureUtc:
    """Tests for ensure_utc function."""

    def test_none(self):
        assert ensure_utc(None) is None

    def test_naive_datetime_gets_utc(self):
        """Test that naive datetimes are treated as UTC."""
        result = ensure_utc(datetime(2024, 1, 1, 12, 0))

        assert result == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_other_timezone_converted(self):
        """Test conversion from a non-UTC offset."""
        minus_five = timezone(timedelta(hours=-5))
        result = ensure_utc(datetime(2024, 1, 1, 7, 0, tzinfo=minus_five))

        assert result == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert result.tzinfo == timezone.utc


class TestParseIsoDatetime:
    """Tests for parse_iso_datetime function."""

    def test_zulu_suffix(self):
        result = parse_iso_datetime("2024-01-01T09:30:00Z")

        assert result == datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc)

    def test_milliseconds(self):
        """Test the shape JavaScript's toISOString produces."""
        result = parse_iso_datetime("2024-01-01T09:30:00.123Z")

        assert result.microsecond == 123000

    def test_offset_converted(self):
        result = parse_iso_datetime("2024-01-01T09:30:00+02:00")

        assert result == datetime(2024, 1, 1, 7, 30, tzinfo=timezone.utc)

    def test_bare_date(self):
        """Test that a date without time is midnight UTC."""
        result = parse_iso_datetime("2024-02-01")

        assert result == datetime(2024, 2, 1, tzinfo=timezone.utc)

    def test_invalid_strings(self):
        """Test that unparseable input yields None."""
        assert parse_iso_datetime("") is None
        assert parse_iso_datetime("   ") is None
        assert parse_iso_datetime("not a date") is None
        assert parse_iso_datetime("2024-13-45") is None

    @pytest.mark.parametrize("value", ["9999-12-31T23:00:00-05:00", "0001-01-01T00:00:00+01:00"])
    def test_overflow_on_utc_conversion(self, value):
        assert parse_iso_datetime(value) is None


class TestCoerceTimestamp:
    """Tests for coerce_timestamp function."""

    def test_iso_string(self):
        assert coerce_timestamp("2024-01-01") == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_datetime(self):
        assert coerce_timestamp(datetime(2024, 1, 1)) == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_epoch_seconds(self):
        assert coerce_timestamp(1704067200) == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_epoch_milliseconds(self):
        """Test that large values are read as milliseconds."""
        assert coerce_timestamp(1704067200000) == datetime(2024, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "value",
        [
            "9999-12-31T23:00:00-05:00",
            "0001-01-01T00:00:00+01:00",
            datetime(9999, 12, 31, 23, tzinfo=timezone(timedelta(hours=-5))),
        ],
    )
    def test_out_of_range_after_utc_conversion(self, value):
        """Test that values which overflow when shifted to UTC yield None."""
        assert coerce_timestamp(value) is None

    @pytest.mark.parametrize("value", [None, True, False, [], {}, "garbage"])
    def test_unusable_values(self, value):
        """Test that anything else yields None."""
        assert coerce_timestamp(value) is None


class TestFormatTimestamp:
    """Tests for format_timestamp function."""

    def test_format(self):
        dt = datetime(2025, 11, 4, 12, 0, 0, tzinfo=timezone.utc)

        assert format_timestamp(dt) == "2025-11-04T12:00:00Z"

    def test_converts_to_utc(self):
        plus_one = timezone(timedelta(hours=1))

        assert format_timestamp(datetime(2025, 11, 4, 13, 0, tzinfo=plus_one)) == "2025-11-04T12:00:00Z"

    def test_none(self):
        assert format_timestamp(None) == ""
