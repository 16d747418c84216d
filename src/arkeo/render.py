"""Render entry points - pick a formatter and write its output to a sink."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import TextIO

import click

from .core.activity import Activity, Timeline
from .formatters import (
    format_csv,
    format_day_json,
    format_day_table,
    format_taxi_day,
    format_taxi_week,
    format_week_json,
    format_week_table,
)
from .formatters.table import medium_date

logger = logging.getLogger(__name__)

FORMATS = ("table", "json", "csv", "taxi")


class RenderError(ValueError):
    """Raised when a render call violates its contract (e.g. week view without days)."""

    pass


@dataclass
class RenderOptions:
    """How a timeline is rendered."""

    max_items: int = 500
    show_details: bool = False
    group_by_day: bool = False
    use_colors: bool = False


def limit(activities: list[Activity], max_items: int) -> list[Activity]:
    """First max_items activities; 0 or negative means no limit."""
    if max_items > 0 and len(activities) > max_items:
        return activities[:max_items]
    return activities


def _check_format(fmt: str) -> None:
    if fmt not in FORMATS:
        raise RenderError(f"Unknown format '{fmt}'. Choose from: {', '.join(FORMATS)}")


def _write(text: str, out: TextIO | None, options: RenderOptions) -> None:
    click.echo(text, file=out, color=options.use_colors or None)


def render_timeline(
    timeline: Timeline,
    fmt: str = "table",
    options: RenderOptions | None = None,
    out: TextIO | None = None,
) -> None:
    """Render a single-day timeline."""
    options = options or RenderOptions()
    _check_format(fmt)

    activities = limit(timeline.activities, options.max_items)
    logger.debug(f"Rendering {len(activities)}/{len(timeline.activities)} activities as {fmt}")

    match fmt:
        case "json":
            text = format_day_json(timeline, activities)
        case "csv":
            text = format_csv(activities)
        case "taxi":
            text = format_taxi_day(timeline.date, activities)
        case _:
            text = format_day_table(timeline, activities, options.show_details, options.use_colors)

    _write(text, out, options)


def render_week(
    activities: list[Activity],
    days: list[date],
    fmt: str = "table",
    options: RenderOptions | None = None,
    out: TextIO | None = None,
) -> None:
    """
    Render activities grouped over a fixed set of days.

    The input list is not modified: it is sorted into a copy, then truncated
    to max_items before grouping.
    """
    if not days:
        raise RenderError("week days must be provided for week view")

    options = options or RenderOptions()
    _check_format(fmt)

    ordered = limit(sorted(activities, key=lambda a: a.timestamp), options.max_items)
    logger.debug(f"Rendering week of {days[0]} ({len(days)} days, {len(ordered)} activities) as {fmt}")

    match fmt:
        case "json":
            text = format_week_json(ordered, days)
        case "csv":
            text = format_csv(ordered)
        case "taxi":
            text = format_taxi_week(ordered, days)
        case _:
            text = format_week_table(ordered, days, options.show_details, options.use_colors)

    _write(text, out, options)


def render(
    target: Timeline | list[Activity],
    fmt: str = "table",
    options: RenderOptions | None = None,
    days: list[date] | None = None,
    out: TextIO | None = None,
) -> None:
    """
    Single render entry point.

    With options.group_by_day (or a plain activity list) the week view is
    used and `days` is required; otherwise `target` is rendered as one day.
    """
    options = options or RenderOptions()

    if options.group_by_day or not isinstance(target, Timeline):
        activities = target.activities if isinstance(target, Timeline) else target
        render_week(activities, days or [], fmt, options, out)
        return

    render_timeline(target, fmt, options, out)


def render_summary(timeline: Timeline, out: TextIO | None = None) -> None:
    """Totals, time range and per-type / per-source counts."""
    summary = timeline.get_summary()
    lines = [f"Timeline Summary for {medium_date(summary.date)}", "═" * 40]
    lines.append(f"Total Activities: {summary.total_activities}")

    if summary.total_activities:
        start, end = summary.time_range
        lines.append(f"Time Range: {start.strftime('%H:%M')} - {end.strftime('%H:%M')}")
        lines.append("")
        lines.append("By Activity Type:")
        for activity_type, count in sorted(summary.by_type.items()):
            lines.append(f"   {activity_type:<15} {count}")
        lines.append("")
        lines.append("By Source:")
        for source, count in sorted(summary.by_source.items()):
            lines.append(f"   {source:<15} {count}")

    click.echo("\n".join(lines), file=out)
