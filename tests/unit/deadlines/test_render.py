"""
test_render.py
--------------
Unit tests for countdown.deadlines.render.
"""
from datetime import datetime, timedelta, timezone

import pytest

from countdown.deadlines.models import Entry
from countdown.deadlines.render import (
    format_countdown,
    format_deadline,
    format_relative,
    render_board,
    render_entry,
    timer_text,
)


class TestFormatCountdown:
    """Test format_countdown function."""

    def test_components(self):
        assert format_countdown(3 * 86400 + 4 * 3600 + 5 * 60 + 6) == "03 days 04h 05m 06s"

    def test_zero(self):
        assert format_countdown(0) == "00 days 00h 00m 00s"

    def test_fractional_seconds_truncated(self):
        assert format_countdown(59.9) == "00 days 00h 00m 59s"

    def test_many_days(self):
        assert format_countdown(120 * 86400) == "120 days 00h 00m 00s"


class TestFormatRelative:
    """Test format_relative function."""

    @pytest.mark.parametrize(
        "seconds, expected",
        [
            (10, "a few seconds ago"),
            (60, "a minute ago"),
            (10 * 60, "10 minutes ago"),
            (3600, "an hour ago"),
            (5 * 3600, "5 hours ago"),
            (30 * 3600, "a day ago"),
            (5 * 86400, "5 days ago"),
            (30 * 86400, "a month ago"),
            (90 * 86400, "3 months ago"),
            (400 * 86400, "a year ago"),
            (3 * 365 * 86400, "3 years ago"),
        ],
    )
    def test_thresholds(self, seconds, expected):
        assert format_relative(seconds) == expected


class TestFormatDeadline:
    """Test format_deadline function."""

    def test_evening(self):
        instant = datetime(2026, 3, 15, 23, 59, 59, tzinfo=timezone.utc)
        assert format_deadline(instant, timezone.utc) == "15 Mar 2026, 11:59:59 pm"

    def test_midnight_hour_is_twelve_am(self):
        instant = datetime(2026, 3, 1, 0, 5, 0, tzinfo=timezone.utc)
        assert format_deadline(instant, timezone.utc) == "1 Mar 2026, 12:05:00 am"

    def test_converted_to_viewer_zone(self):
        instant = datetime(2026, 3, 16, 11, 59, 59, tzinfo=timezone.utc)
        assert format_deadline(instant, timezone(timedelta(hours=-12))) == "15 Mar 2026, 11:59:59 pm"

    def test_tba(self):
        assert format_deadline(None) == "TBA"


class TestRenderEntry:
    """Test timer_text, render_entry and render_board."""

    def test_timer_upcoming(self, make_entry, now):
        entry = make_entry("a", timedelta(days=2, hours=3))
        assert timer_text(entry, now) == "02 days 03h 00m 00s"

    def test_timer_past(self, make_entry, now):
        entry = make_entry("a", -timedelta(days=5))
        assert timer_text(entry, now) == "5 days ago"

    def test_timer_due_now_is_relative(self, make_entry, now):
        assert timer_text(make_entry("a", timedelta(0)), now) == "a few seconds ago"

    def test_timer_tba(self, make_entry, now):
        assert timer_text(make_entry("a"), now) == "TBA"

    def test_render_entry_lines(self, now):
        entry = Entry(
            id="confx2026-0",
            name="ConfX",
            year=2026,
            instant=now + timedelta(days=1),
            details="Conference on X",
            place="Lisbon",
            tags=("nlp", "ml"),
        )
        lines = render_entry(entry, now, timezone.utc)
        assert lines == [
            "ConfX 2026",
            "  01 days 00h 00m 00s",
            "  Deadline: 2 Mar 2026, 12:00:30 pm",
            "  Conference on X | Lisbon",
            "  Tags: nlp, ml",
        ]

    def test_render_entry_without_tags(self, make_entry, now):
        lines = render_entry(make_entry("a", tags=["nlp"]), now, show_tags=False)
        assert lines == ["A", "  TBA", "  Deadline: TBA"]

    def test_render_board_separates_entries(self, make_entry, now):
        lines = render_board([make_entry("a"), make_entry("b")], now)
        assert lines.count("-" * 40) == 2
        assert lines[0] == "A"
