"""Tests for the render entry points."""

import io
import json
from datetime import date, datetime

import pytest

from arkeo.core.activity import Timeline
from arkeo.render import RenderError, RenderOptions, render, render_summary, render_timeline, render_week


@pytest.fixture
def week():
    return [date(2025, 1, d) for d in range(13, 18)]


@pytest.fixture
def five_activities(make_activity):
    return [make_activity(datetime(2025, 1, 15, 9 + i, 0), title=f"Task {i}") for i in range(5)]


def _render_to_string(*args, **kwargs) -> str:
    out = io.StringIO()
    render(*args, out=out, **kwargs)
    return out.getvalue()


class TestRenderErrors:
    def test_week_without_days_raises(self, five_activities):
        with pytest.raises(RenderError):
            render_week(five_activities, [], "table", RenderOptions(), io.StringIO())

    def test_group_by_day_without_days_raises(self, five_activities):
        timeline = Timeline(date=date(2025, 1, 15), activities=five_activities)
        with pytest.raises(RenderError):
            render(timeline, "table", RenderOptions(group_by_day=True), out=io.StringIO())

    def test_unknown_format_raises(self):
        with pytest.raises(RenderError, match="Unknown format"):
            render_timeline(Timeline(date=date(2025, 1, 15)), "xml", out=io.StringIO())

    @pytest.mark.parametrize("fmt", ["table", "json", "csv", "taxi"])
    def test_empty_week_renders(self, week, fmt):
        text = _render_to_string([], fmt, RenderOptions(group_by_day=True), days=week)
        assert text


class TestMaxItems:
    @pytest.mark.parametrize(
        "fmt,count",
        [
            ("json", lambda text: len(json.loads(text)["activities"])),
            ("csv", lambda text: len(text.strip().split("\n")) - 1),
            ("taxi", lambda text: len(text.strip().split("\n")) - 2),
            ("table", lambda text: text.count("Task ")),
        ],
    )
    def test_day_keeps_first_n(self, five_activities, fmt, count):
        timeline = Timeline(date=date(2025, 1, 15), activities=five_activities)
        text = _render_to_string(timeline, fmt, RenderOptions(max_items=3))
        assert count(text) == 3
        assert "Task 3" not in text

    @pytest.mark.parametrize("fmt", ["table", "json", "csv", "taxi"])
    def test_week_keeps_first_n(self, five_activities, week, fmt):
        text = _render_to_string(five_activities, fmt, RenderOptions(max_items=3, group_by_day=True), days=week)
        assert "Task 2" in text
        assert "Task 3" not in text

    def test_zero_means_unlimited(self, five_activities):
        timeline = Timeline(date=date(2025, 1, 15), activities=five_activities)
        text = _render_to_string(timeline, "csv", RenderOptions(max_items=0))
        assert len(text.strip().split("\n")) == 6


class TestRenderWeek:
    def test_week_does_not_mutate_input(self, week, make_activity):
        late = make_activity(datetime(2025, 1, 16, 9, 0))
        early = make_activity(datetime(2025, 1, 14, 9, 0))
        activities = [late, early]
        _render_to_string(activities, "json", RenderOptions(group_by_day=True), days=week)
        assert activities == [late, early]

    def test_week_json_sorted(self, week, make_activity):
        late = make_activity(datetime(2025, 1, 16, 9, 0), id="late")
        early = make_activity(datetime(2025, 1, 14, 9, 0), id="early")
        data = json.loads(_render_to_string([late, early], "json", RenderOptions(group_by_day=True), days=week))
        assert [a["id"] for a in data["activities"]] == ["early", "late"]


class TestRenderSummary:
    def test_summary_output(self, five_activities):
        out = io.StringIO()
        render_summary(Timeline(date=date(2025, 1, 15), activities=five_activities), out)
        text = out.getvalue()
        assert "Timeline Summary for January 15, 2025" in text
        assert "Total Activities: 5" in text
        assert "Time Range: 09:00 - 13:00" in text
        assert "git_commit" in text

    def test_summary_empty(self):
        out = io.StringIO()
        render_summary(Timeline(date=date(2025, 1, 15)), out)
        assert "Total Activities: 0" in out.getvalue()
        assert "Time Range" not in out.getvalue()
