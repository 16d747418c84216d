"""Human-readable table formatting - pure functions, no I/O."""

from datetime import date, timedelta

from arkeo.core.activity import Activity, Timeline, format_span
from arkeo.core.grouping import group_activities_by_day

from .labels import activity_color, colorize, source_label

GAP_THRESHOLD = timedelta(hours=1)
HEAVY_RULE = "═" * 60
LIGHT_RULE = "─" * 60


def long_date(d: date) -> str:
    """e.g. 'Wednesday, January 15, 2025'."""
    return f"{d:%A, %B} {d.day}, {d.year}"


def medium_date(d: date) -> str:
    """e.g. 'January 15, 2025'."""
    return f"{d:%B} {d.day}, {d.year}"


def format_activity(activity: Activity, show_details: bool = False, use_colors: bool = False) -> list[str]:
    """Format one activity as a line, plus detail lines when requested."""
    title = activity.title
    if activity.duration is not None:
        title = f"{title} ({activity.format_duration()})"

    label = source_label(activity.source)
    line = " ".join(
        [
            colorize(activity.timestamp.strftime("%H:%M"), use_colors, fg="green", bold=True),
            colorize(f"{label:<4}", use_colors, fg="bright_black"),
            colorize(f"{activity.source}:", use_colors, fg="bright_black"),
            colorize(title, use_colors, fg=activity_color(activity)),
        ]
    )
    lines = [line]

    if show_details:
        if activity.description:
            lines.append(f"   Description: {colorize(activity.description, use_colors, fg='white')}")
        if activity.duration is not None:
            lines.append(f"   Duration: {colorize(activity.format_duration(), use_colors, fg='cyan')}")
        if activity.url:
            lines.append(f"   URL: {colorize(activity.url, use_colors, fg='blue')}")

    return lines


def format_gap(gap: timedelta, use_colors: bool = False) -> str:
    return "     " + colorize(f"── {format_span(gap)} gap ──", use_colors, fg="white")


def format_activity_lines(
    activities: list[Activity],
    show_details: bool = False,
    use_colors: bool = False,
) -> list[str]:
    """Chronological activity lines with a gap marker for gaps over an hour."""
    lines = []
    previous = None
    for activity in activities:
        if previous is not None:
            gap = activity.timestamp - previous.timestamp
            if gap > GAP_THRESHOLD:
                lines.append(format_gap(gap, use_colors))
        lines.extend(format_activity(activity, show_details, use_colors))
        previous = activity
    return lines


def format_range_line(activities: list[Activity], use_colors: bool = False, with_span: bool = True) -> str:
    """'N activities from HH:MM to HH:MM (span: ...)' for a non-empty list."""
    first, last = activities[0].timestamp, activities[-1].timestamp
    line = (
        f"{colorize(str(len(activities)), use_colors, bold=True)} activities from "
        f"{colorize(first.strftime('%H:%M'), use_colors, fg='green')} to "
        f"{colorize(last.strftime('%H:%M'), use_colors, fg='green')}"
    )
    if with_span:
        line += f" (span: {colorize(format_span(last - first), use_colors, fg='cyan')})"
    return line


def format_day_table(
    timeline: Timeline,
    activities: list[Activity],
    show_details: bool = False,
    use_colors: bool = False,
) -> str:
    """Single-day table. `activities` is the (possibly truncated) list to show."""
    if not activities:
        return f"No activities found for {colorize(medium_date(timeline.date), use_colors, bold=True)}"

    lines = [
        colorize(f"Timeline for {long_date(timeline.date)}", use_colors, fg="blue", bold=True),
        format_range_line(activities, use_colors),
        "",
        "Activities (chronological order):",
        colorize(HEAVY_RULE, use_colors, fg="white"),
    ]
    lines.extend(format_activity_lines(activities, show_details, use_colors))
    return "\n".join(lines)


def format_week_table(
    activities: list[Activity],
    days: list[date],
    show_details: bool = False,
    use_colors: bool = False,
) -> str:
    """
    Week table grouped by day.

    Only days with at least one activity get a section.
    """
    by_day = group_activities_by_day(activities, days)
    total = sum(len(day_activities) for day_activities in by_day.values())

    lines = [colorize(f"Timeline for Week of {long_date(days[0])}", use_colors, fg="blue", bold=True)]
    if total == 0:
        lines.append("No activities found for the week.")
        return "\n".join(lines)

    lines.append(f"{colorize(str(total), use_colors, bold=True)} activities across {len(days)} days")
    lines.append("")

    for day in days:
        day_activities = by_day[day]
        if not day_activities:
            continue
        lines.append(colorize(long_date(day), use_colors, fg="cyan", bold=True))
        lines.append(colorize(LIGHT_RULE, use_colors, fg="white"))
        lines.append(format_range_line(day_activities, use_colors, with_span=False))
        lines.append("")
        lines.extend(format_activity_lines(day_activities, show_details, use_colors))
        lines.append("")

    return "\n".join(lines).rstrip("\n")
