"""Lookup tables for source labels and activity colors."""

from types import MappingProxyType

import click

from arkeo.core.activity import Activity, ActivityType, type_name

DEFAULT_LABEL = "SRC"
DEFAULT_COLOR = "bright_white"

SOURCE_LABELS = MappingProxyType(
    {
        "github": "GH",
        "gitlab": "GL",
        "calendar": "CAL",
        "youtrack": "YT",
        "slack": "SLK",
        "jira": "JRA",
        "macos_system": "MAC",
        "system": "SYS",
        "file": "FILE",
        "browser": "WEB",
        "webhooks": "HOOK",
    }
)

TYPE_COLORS = MappingProxyType(
    {
        ActivityType.GIT_COMMIT.value: "green",
        ActivityType.CALENDAR.value: "blue",
        ActivityType.SLACK.value: "magenta",
        ActivityType.JIRA.value: "yellow",
        ActivityType.YOUTRACK.value: "cyan",
        ActivityType.SYSTEM.value: "white",
        ActivityType.CUSTOM.value: "bright_white",
        ActivityType.FILE.value: "yellow",
        ActivityType.BROWSER.value: "blue",
        ActivityType.APPLICATION.value: "cyan",
    }
)


def source_label(source: str) -> str:
    return SOURCE_LABELS.get(source, DEFAULT_LABEL)


def activity_color(activity: Activity) -> str:
    return TYPE_COLORS.get(type_name(activity.type), DEFAULT_COLOR)


def colorize(text: str, enabled: bool, **style) -> str:
    """Apply click styling only when colors are enabled."""
    if not enabled:
        return text
    return click.style(text, **style)
