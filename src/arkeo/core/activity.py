"""Pure activity/timeline domain logic - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum


class ActivityType(str, Enum):
    """Known activity types. Connectors may emit any other string."""

    GIT_COMMIT = "git_commit"
    CALENDAR = "calendar"
    SLACK = "slack"
    JIRA = "jira"
    YOUTRACK = "youtrack"
    CUSTOM = "custom"
    FILE = "file"
    BROWSER = "browser"
    APPLICATION = "application"
    SYSTEM = "system"


def type_name(activity_type: str) -> str:
    """Plain string value of an activity type (enum member or raw string)."""
    if isinstance(activity_type, Enum):
        return activity_type.value
    return activity_type or ""


@dataclass
class Activity:
    """A single timestamped event from any source."""

    id: str
    type: str
    title: str
    timestamp: datetime
    source: str
    description: str = ""
    duration: timedelta | None = None
    url: str = ""
    metadata: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.timestamp.strftime('%H:%M')}] {type_name(self.type)} - {self.title} ({self.source})"

    def format_duration(self) -> str:
        """Human-readable duration, or N/A if unknown."""
        if self.duration is None:
            return "N/A"

        seconds = int(self.duration.total_seconds())
        if seconds < 60:
            return f"{seconds}s"
        if seconds < 3600:
            return f"{seconds // 60}m"
        return f"{seconds // 3600}h {(seconds // 60) % 60}m"

    def to_dict(self) -> dict:
        """Serialize for JSON output. Unset optional fields are omitted."""
        data = {
            "id": self.id,
            "type": type_name(self.type),
            "title": self.title,
            "description": self.description,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.duration is not None:
            data["duration"] = self.duration.total_seconds()
        data["source"] = self.source
        if self.url:
            data["url"] = self.url
        if self.metadata:
            data["metadata"] = dict(self.metadata)
        return data


@dataclass
class TimelineSummary:
    """Read-only overview of a timeline, rebuilt on every call."""

    date: date
    total_activities: int
    by_type: dict[str, int]
    by_source: dict[str, int]
    time_range: tuple[datetime | None, datetime | None]


@dataclass
class Timeline:
    """
    Activities for one calendar day, always sorted by timestamp.

    `date` is informational: activities are not filtered against it.
    """

    date: date
    activities: list[Activity] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.sort()

    def add_activity(self, activity: Activity) -> None:
        self.activities.append(activity)
        self.sort()

    def add_activities(self, activities: list[Activity]) -> None:
        """Append a batch (typically every connector's results) and re-sort."""
        self.activities.extend(activities)
        self.sort()

    def sort(self) -> None:
        """Sort by timestamp. Stable, so equal timestamps keep arrival order."""
        self.activities.sort(key=lambda a: a.timestamp)

    def filter_by_type(self, activity_type: str) -> list[Activity]:
        wanted = type_name(activity_type)
        return [a for a in self.activities if type_name(a.type) == wanted]

    def filter_by_source(self, source: str) -> list[Activity]:
        return [a for a in self.activities if a.source == source]

    def filter_by_time_range(self, start: datetime, end: datetime) -> list[Activity]:
        """Activities strictly between start and end (both bounds excluded)."""
        return [a for a in self.activities if start < a.timestamp < end]

    def get_time_range(self) -> tuple[datetime | None, datetime | None]:
        """First and last timestamps, or (None, None) for an empty timeline."""
        if not self.activities:
            return None, None
        return self.activities[0].timestamp, self.activities[-1].timestamp

    def get_summary(self) -> TimelineSummary:
        by_type: dict[str, int] = {}
        by_source: dict[str, int] = {}

        for activity in self.activities:
            key = type_name(activity.type)
            by_type[key] = by_type.get(key, 0) + 1
            by_source[activity.source] = by_source.get(activity.source, 0) + 1

        return TimelineSummary(
            date=self.date,
            total_activities=len(self.activities),
            by_type=by_type,
            by_source=by_source,
            time_range=self.get_time_range(),
        )

    def to_dict(self, activities: list[Activity] | None = None) -> dict:
        """Serialize, optionally with a truncated activity list."""
        shown = self.activities if activities is None else activities
        return {
            "date": self.date.isoformat(),
            "activities": [a.to_dict() for a in shown],
        }


def format_span(delta: timedelta) -> str:
    """Compact duration for spans and gaps (e.g. 45m, 2h, 1h30m, 1d3h)."""
    seconds = int(delta.total_seconds())
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        hours, minutes = seconds // 3600, (seconds // 60) % 60
        return f"{hours}h" if minutes == 0 else f"{hours}h{minutes}m"
    days, hours = seconds // 86400, (seconds // 3600) % 24
    return f"{days}d" if hours == 0 else f"{days}d{hours}h"
