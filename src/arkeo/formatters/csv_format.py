"""CSV formatting - pure functions, no I/O."""

import csv
import io

from arkeo.core.activity import Activity, type_name

CSV_HEADER = ["timestamp", "type", "source", "title", "description", "duration", "url"]


def activity_row(activity: Activity) -> list[str]:
    duration = activity.format_duration() if activity.duration is not None else ""
    return [
        activity.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
        type_name(activity.type),
        activity.source,
        activity.title,
        activity.description,
        duration,
        activity.url,
    ]


def format_csv(activities: list[Activity]) -> str:
    """
    Header row plus one row per activity.

    Fields containing a comma, quote or newline are quoted with doubled
    inner quotes; everything else is written bare.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for activity in activities:
        writer.writerow(activity_row(activity))
    return buffer.getvalue().rstrip("\n")
