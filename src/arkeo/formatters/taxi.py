"""Taxi timesheet formatting - pure functions, no I/O."""

from datetime import date

from arkeo.core.activity import Activity
from arkeo.core.grouping import group_activities_by_day
from arkeo.core.taxi import TaxiEntry, calculate_time_ranges


def format_taxi_entry(entry: TaxiEntry, continuation: bool) -> str:
    """Full 'HH:MM-HH:MM' range, or '-HH:MM' when continuing the previous block."""
    end = entry.end.strftime("%H:%M")
    if continuation:
        return f"{entry.project:<10} -{end} {entry.description}"
    return f"{entry.project:<10} {entry.start.strftime('%H:%M')}-{end} {entry.description}"


def format_taxi_day(day: date, activities: list[Activity]) -> str:
    """
    Date header followed by one line per entry.

    A day without activities still gets its header.
    """
    lines = [day.strftime("%d/%m/%Y"), ""]

    previous_end = None
    for entry in calculate_time_ranges(activities):
        lines.append(format_taxi_entry(entry, entry.continues(previous_end)))
        previous_end = entry.end

    return "\n".join(lines)


def format_taxi_week(activities: list[Activity], days: list[date]) -> str:
    """Each requested day rendered independently, separated by exactly one blank line."""
    by_day = group_activities_by_day(activities, days)
    return "\n\n".join(format_taxi_day(day, by_day[day]).rstrip("\n") for day in days)
