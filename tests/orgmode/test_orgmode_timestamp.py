"""Tests for Org timestamp parsing."""

import pytest

from orgmode import find_timestamps, parse_timestamp


class TestParseTimestamp:
    """Test parsing of a single timestamp."""

    def test_active_date(self):
        """Test an active timestamp with a day name."""
        timestamp = parse_timestamp("<2024-01-15 Mon>")
        assert timestamp is not None
        assert timestamp.active
        assert timestamp.date == "2024-01-15"
        assert timestamp.day == "Mon"
        assert timestamp.time is None
        assert timestamp.end_date is None

    def test_inactive_with_time(self):
        """Test an inactive timestamp with a time."""
        timestamp = parse_timestamp("[2024-01-15 Mon 10:30]")
        assert not timestamp.active
        assert timestamp.time == "10:30"

    def test_date_only(self):
        """Test a timestamp without a day name."""
        timestamp = parse_timestamp("<2024-01-15>")
        assert timestamp.date == "2024-01-15"
        assert timestamp.day is None

    def test_single_digit_hour(self):
        """Test a time with a one-digit hour."""
        assert parse_timestamp("<2024-01-15 Mon 9:05>").time == "9:05"

    def test_time_range(self):
        """Test a time range within one day."""
        timestamp = parse_timestamp("<2024-01-15 Mon 10:00-12:00>")
        assert timestamp.time == "10:00"
        assert timestamp.end_time == "12:00"
        assert timestamp.end_date is None

    @pytest.mark.parametrize("text,repeater,warning", [
        ("<2024-01-15 Mon +1w>", "+1w", None),
        ("<2024-01-15 ++1m>", "++1m", None),
        ("<2024-01-15 Mon .+1d -2d>", ".+1d", "-2d"),
        ("<2024-01-15 Mon 08:00 +1y --3d>", "+1y", "--3d"),
        ("<2024-01-15 Mon -5h>", None, "-5h"),
    ])
    def test_repeater_and_warning(self, text, repeater, warning):
        """Test repeater and warning delay cookies."""
        timestamp = parse_timestamp(text)
        assert timestamp.repeater == repeater
        assert timestamp.warning == warning

    def test_date_range(self):
        """Test a range between two dates."""
        timestamp = parse_timestamp("<2024-01-15 Mon>--<2024-01-17 Wed>")
        assert timestamp.date == "2024-01-15"
        assert timestamp.end_date == "2024-01-17"
        assert timestamp.end_time is None

    def test_date_range_with_times(self):
        """Test a range between two dates with times."""
        timestamp = parse_timestamp("<2024-01-15 10:00>--<2024-01-16 12:00>")
        assert timestamp.time == "10:00"
        assert timestamp.end_date == "2024-01-16"
        assert timestamp.end_time == "12:00"

    def test_timestamp_in_text(self):
        """Test that the timestamp is found inside surrounding text."""
        timestamp = parse_timestamp("SCHEDULED: <2024-03-01 Fri>")
        assert timestamp.date == "2024-03-01"

    @pytest.mark.parametrize("text", [
        "no timestamp here",
        "<2024-01-15]",
        "[2024-01-15>",
        "<2024-1-15>",
        "<not a date>",
        "",
    ])
    def test_no_timestamp(self, text):
        """Test text that contains no valid timestamp."""
        assert parse_timestamp(text) is None


class TestFindTimestamps:
    """Test finding every timestamp in text."""

    def test_multiple(self):
        """Test active and inactive timestamps in one line."""
        timestamps = find_timestamps("<2024-01-01> and [2024-02-02]")
        assert [t.date for t in timestamps] == ["2024-01-01", "2024-02-02"]
        assert [t.active for t in timestamps] == [True, False]

    def test_range_counts_once(self):
        """Test that a date range is a single timestamp."""
        timestamps = find_timestamps("<2024-01-01>--<2024-01-03> then <2024-02-01>")
        assert len(timestamps) == 2
        assert timestamps[0].end_date == "2024-01-03"
        assert timestamps[1].date == "2024-02-01"

    def test_mixed_range_is_not_folded(self):
        """Test that an active stamp does not range into an inactive one."""
        timestamps = find_timestamps("<2024-01-01>--[2024-01-03]")
        assert len(timestamps) == 2
        assert timestamps[0].end_date is None
        assert not timestamps[1].active

    def test_none(self):
        """Test text with no timestamps."""
        assert find_timestamps("nothing to see") == []
