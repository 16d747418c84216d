"""Tests for the table, CSV and JSON formatters."""

import json
from datetime import date, datetime, timedelta

import pytest

from arkeo.core.activity import ActivityType, Timeline
from arkeo.formatters.csv_format import format_csv
from arkeo.formatters.json_format import format_day_json, format_week_json
from arkeo.formatters.labels import activity_color, colorize, source_label
from arkeo.formatters.table import format_activity, format_day_table, format_week_table, long_date


@pytest.fixture
def day():
    return date(2025, 1, 15)


@pytest.fixture
def week():
    return [date(2025, 1, d) for d in range(13, 18)]


class TestLabels:
    def test_known_source_label(self):
        assert source_label("github") == "GH"

    def test_unknown_source_falls_back(self):
        assert source_label("mystery") == "SRC"

    def test_unknown_type_color_falls_back(self, make_activity):
        assert activity_color(make_activity(datetime(2025, 1, 15, 9, 0), type="webhook")) == "bright_white"

    def test_colorize_disabled_is_plain(self):
        assert colorize("text", False, fg="red") == "text"

    def test_colorize_enabled_adds_ansi(self):
        assert colorize("text", True, fg="red") != "text"


class TestTable:
    def test_long_date(self, day):
        assert long_date(day) == "Wednesday, January 15, 2025"

    def test_activity_line(self, make_activity):
        activity = make_activity(datetime(2025, 1, 15, 9, 5), title="Fix bug", duration=timedelta(minutes=30))
        assert format_activity(activity) == ["09:05 GH   github: Fix bug (30m)"]

    def test_details_only_when_requested(self, make_activity):
        activity = make_activity(
            datetime(2025, 1, 15, 9, 5), description="Long story", url="https://example.com/x"
        )
        assert len(format_activity(activity)) == 1
        lines = format_activity(activity, show_details=True)
        assert "   Description: Long story" in lines
        assert "   URL: https://example.com/x" in lines

    def test_empty_day(self, day):
        text = format_day_table(Timeline(date=day), [])
        assert text == "No activities found for January 15, 2025"

    def test_day_header_and_gap_marker(self, day, make_activity):
        activities = [
            make_activity(datetime(2025, 1, 15, 9, 0), title="Morning"),
            make_activity(datetime(2025, 1, 15, 11, 30), title="Late"),
        ]
        timeline = Timeline(date=day, activities=activities)
        lines = format_day_table(timeline, activities).split("\n")

        assert lines[0] == "Timeline for Wednesday, January 15, 2025"
        assert lines[1] == "2 activities from 09:00 to 11:30 (span: 2h30m)"
        assert "Activities (chronological order):" in lines
        assert "     ── 2h30m gap ──" in lines

    def test_no_gap_marker_for_an_hour(self, day, make_activity):
        activities = [make_activity(datetime(2025, 1, 15, 9, 0)), make_activity(datetime(2025, 1, 15, 10, 0))]
        text = format_day_table(Timeline(date=day, activities=activities), activities)
        assert "gap" not in text

    def test_unknown_type_renders(self, day, make_activity):
        activities = [make_activity(datetime(2025, 1, 15, 9, 0), type="totally_new", source="elsewhere")]
        text = format_day_table(Timeline(date=day, activities=activities), activities)
        assert "SRC  elsewhere:" in text

    def test_empty_week(self, week):
        text = format_week_table([], week)
        assert text == "Timeline for Week of Monday, January 13, 2025\nNo activities found for the week."

    def test_week_sections_only_for_active_days(self, week, make_activity):
        activities = [
            make_activity(datetime(2025, 1, 13, 9, 0)),
            make_activity(datetime(2025, 1, 16, 14, 0)),
        ]
        text = format_week_table(activities, week)
        assert "2 activities across 5 days" in text
        assert "Monday, January 13, 2025" in text
        assert "Thursday, January 16, 2025" in text
        assert "Tuesday, January 14, 2025" not in text
        assert not text.endswith("\n")


class TestCsv:
    def test_header_only_when_empty(self):
        assert format_csv([]) == "timestamp,type,source,title,description,duration,url"

    def test_escapes_commas_and_quotes(self, make_activity):
        activity = make_activity(datetime(2025, 1, 15, 9, 0), title='Fix, "auth" bug')
        row = format_csv([activity]).split("\n")[1]
        assert row == '2025-01-15 09:00:00,git_commit,github,"Fix, ""auth"" bug",,,'

    def test_quotes_embedded_newline(self, make_activity):
        activity = make_activity(datetime(2025, 1, 15, 9, 0), title="Notes", description="line1\nline2")
        text = format_csv([activity])
        assert ',Notes,"line1\nline2",' in text

    def test_plain_title_unquoted(self, make_activity):
        activity = make_activity(datetime(2025, 1, 15, 9, 0), title="Plain title")
        assert ",Plain title," in format_csv([activity])

    def test_duration_column(self, make_activity):
        activity = make_activity(datetime(2025, 1, 15, 9, 0), duration=timedelta(hours=1, minutes=5))
        assert ",1h 5m," in format_csv([activity])


class TestJson:
    def test_empty_day_envelope(self, day):
        data = json.loads(format_day_json(Timeline(date=day), []))
        assert data == {"date": "2025-01-15", "activities": []}

    def test_day_envelope_uses_given_activities(self, day, make_activity):
        activities = [make_activity(datetime(2025, 1, 15, h, 0)) for h in (9, 10)]
        data = json.loads(format_day_json(Timeline(date=day, activities=activities), activities[:1]))
        assert len(data["activities"]) == 1

    def test_non_ascii_kept(self, day, make_activity):
        activities = [make_activity(datetime(2025, 1, 15, 9, 0), title="Café")]
        assert "Café" in format_day_json(Timeline(date=day, activities=activities), activities)

    def test_week_envelope(self, week, make_activity):
        activities = [
            make_activity(datetime(2025, 1, 13, 9, 0), type=ActivityType.CALENDAR),
            make_activity(datetime(2025, 1, 15, 9, 0)),
        ]
        data = json.loads(format_week_json(activities, week))
        assert data["week_start"] == "2025-01-13"
        assert data["week_end"] == "2025-01-17"
        assert data["total_count"] == 2
        assert list(data["by_day"]) == [d.isoformat() for d in week]
        assert len(data["by_day"]["2025-01-13"]) == 1
        assert data["by_day"]["2025-01-14"] == []

    def test_empty_week_envelope(self, week):
        data = json.loads(format_week_json([], week))
        assert data["total_count"] == 0
        assert data["activities"] == []
        assert len(data["by_day"]) == 5
