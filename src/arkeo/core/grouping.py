"""Day/week grouping of activities - pure functions."""

from datetime import date, timedelta

from .activity import Activity


def group_activities_by_day(
    activities: list[Activity],
    days: list[date],
) -> dict[date, list[Activity]]:
    """
    Partition activities into one bucket per requested day.

    Every requested day gets a bucket, even if empty. An activity belongs to
    the first day equal to its timestamp's date (in the timestamp's own
    timezone). Activities matching no day are dropped.
    """
    by_day: dict[date, list[Activity]] = {day: [] for day in days}

    for activity in activities:
        activity_date = activity.timestamp.date()
        for day in days:
            if activity_date == day:
                by_day[day].append(activity)
                break

    return by_day


def week_days(target: date, include_weekend: bool = False) -> list[date]:
    """Monday..Friday (or Monday..Sunday) of the week containing target."""
    monday = target - timedelta(days=target.weekday())
    count = 7 if include_weekend else 5
    return [monday + timedelta(days=i) for i in range(count)]
