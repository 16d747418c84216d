"""JSON formatting - pure functions, no I/O."""

import json
from datetime import date

from arkeo.core.activity import Activity, Timeline
from arkeo.core.grouping import group_activities_by_day


def format_day_json(timeline: Timeline, activities: list[Activity]) -> str:
    """Timeline envelope carrying only the activities being shown."""
    return json.dumps(timeline.to_dict(activities), indent=2, ensure_ascii=False)


def format_week_json(activities: list[Activity], days: list[date]) -> str:
    """Week envelope: flat chronological list plus per-day groupings."""
    by_day = group_activities_by_day(activities, days)
    output = {
        "week_start": days[0].isoformat(),
        "week_end": days[-1].isoformat(),
        "days": [d.isoformat() for d in days],
        "activities": [a.to_dict() for a in activities],
        "by_day": {d.isoformat(): [a.to_dict() for a in day_activities] for d, day_activities in by_day.items()},
        "total_count": len(activities),
    }
    return json.dumps(output, indent=2, ensure_ascii=False)
