"""Functional core - pure business logic with no I/O."""

from .activity import Activity, ActivityType, Timeline, TimelineSummary, format_span, type_name
from .grouping import group_activities_by_day, week_days
from .taxi import TaxiEntry, calculate_time_ranges, round_down_to_quarter, round_up_to_next_quarter

__all__ = [
    # Activity / Timeline
    "Activity",
    "ActivityType",
    "Timeline",
    "TimelineSummary",
    "format_span",
    "type_name",
    # Grouping
    "group_activities_by_day",
    "week_days",
    # Taxi
    "TaxiEntry",
    "calculate_time_ranges",
    "round_down_to_quarter",
    "round_up_to_next_quarter",
]
