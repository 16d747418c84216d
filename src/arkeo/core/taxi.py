"""Taxi timesheet derivation - pure functions, no I/O.

Turns an irregular list of activities into quarter-hour blocks suitable for
entering into a timesheet.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from .activity import Activity

DEFAULT_DURATION = timedelta(minutes=15)
GAP_THRESHOLD = timedelta(minutes=30)
CONTINUATION_TOLERANCE = timedelta(minutes=5)
DEFAULT_PROJECT = "??"


@dataclass
class TaxiEntry:
    """A rounded timesheet block."""

    project: str
    start: datetime
    end: datetime
    description: str

    def continues(self, previous_end: datetime | None) -> bool:
        """True if this entry starts within 5 minutes of previous_end."""
        if previous_end is None:
            return False
        return abs(self.start - previous_end) <= CONTINUATION_TOLERANCE


def round_down_to_quarter(dt: datetime) -> datetime:
    """Round down to 00/15/30/45. Already on a boundary: unchanged."""
    dt = dt.replace(second=0, microsecond=0)
    return dt - timedelta(minutes=dt.minute % 15)


def round_up_to_next_quarter(dt: datetime) -> datetime:
    """Round up to the next 00/15/30/45. Already on a boundary: still advances."""
    dt = dt.replace(second=0, microsecond=0)
    return dt + timedelta(minutes=15 - dt.minute % 15)


def raw_end_time(activities: list[Activity], index: int) -> datetime:
    """
    Unrounded end time for activities[index].

    Explicit positive duration wins; otherwise the next activity's start if
    it is at most 30 minutes away; otherwise a 15 minute default block.
    """
    activity = activities[index]
    start = activity.timestamp

    if activity.duration is not None and activity.duration > timedelta(0):
        return start + activity.duration

    if index < len(activities) - 1:
        next_start = activities[index + 1].timestamp
        if next_start - start <= GAP_THRESHOLD:
            return next_start

    return start + DEFAULT_DURATION


def calculate_time_ranges(activities: list[Activity]) -> list[TaxiEntry]:
    """Convert chronologically sorted activities into taxi entries."""
    entries = []
    for i, activity in enumerate(activities):
        end = raw_end_time(activities, i)
        entries.append(
            TaxiEntry(
                project=DEFAULT_PROJECT,
                start=round_down_to_quarter(activity.timestamp),
                end=round_up_to_next_quarter(end),
                description=f"{activity.title} ({activity.source})",
            )
        )
    return entries
