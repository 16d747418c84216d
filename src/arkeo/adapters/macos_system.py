"""macOS system adapter - screen lock/unlock events from the unified log."""

import logging
import re
import shutil
import subprocess
import sys
from datetime import date, datetime
from typing import Mapping

from arkeo.core.activity import Activity, ActivityType

from .base import BaseConnector, ConnectorConfigError, ConnectorError

logger = logging.getLogger(__name__)

MACOS_ONLY = "macOS system events connector only works on macOS"

LOG_LINE = re.compile(
    r"^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}(?:\.\d+)?[+-]\d{4})\s+.*?loginwindow:.*?setScreenIsLocked.*?setting to (\d+)"
)

LOCK_STATES = {
    "0": ("Computer is active, user started working", "Screen unlocked - computer became active"),
    "1": ("Computer is idle, user left the computer", "Screen locked - computer became idle"),
}


def parse_log_output(output: str, target_date: date) -> list[Activity]:
    """Turn `log show` output into lock/unlock activities on target_date."""
    activities = []

    for line in output.splitlines():
        match = LOG_LINE.match(line.strip())
        if not match:
            continue

        raw_ts, state = match.groups()
        if state not in LOCK_STATES:
            continue

        try:
            fmt = "%Y-%m-%d %H:%M:%S.%f%z" if "." in raw_ts else "%Y-%m-%d %H:%M:%S%z"
            timestamp = datetime.strptime(raw_ts, fmt).astimezone().replace(tzinfo=None)
        except ValueError:
            continue

        if timestamp.date() != target_date:
            continue

        title, description = LOCK_STATES[state]
        activities.append(
            Activity(
                id=f"macos-system-{int(timestamp.timestamp())}",
                type=ActivityType.SYSTEM,
                title=title,
                description=f"On {raw_ts} : {description}",
                timestamp=timestamp,
                source="macos_system",
                metadata={
                    "lock_state": state,
                    "process": "loginwindow",
                    "event_type": "screen_lock_change",
                },
            )
        )

    return activities


class MacOSSystemConnector(BaseConnector):
    """
    macOS lock/unlock connector.

    Shells out to `log show` filtered on loginwindow's setScreenIsLocked
    messages. Only usable on macOS.
    """

    name = "macos_system"
    description = "macOS system events (lock/unlock) from the system log"

    def __init__(self, session=None, platform: str = sys.platform):
        super().__init__(session)
        self.compatible = platform == "darwin"

    def validate_config(self, config: Mapping[str, object]) -> None:
        if not self.compatible:
            raise ConnectorConfigError(MACOS_ONLY)
        if shutil.which("log") is None:
            raise ConnectorConfigError("log command not available")
        super().validate_config(config)

    def _run_log(self, args: list[str]) -> str:
        if not self.compatible:
            raise ConnectorError(MACOS_ONLY)
        try:
            result = subprocess.run(
                ["log", "show", *args, "--info"],
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as e:
            raise ConnectorError(f"failed to execute log command: {e}") from e
        except FileNotFoundError as e:
            raise ConnectorError("log command not available") from e
        except subprocess.TimeoutExpired as e:
            raise ConnectorError(f"log command timed out after {self.timeout}s") from e
        return result.stdout

    def test_connection(self) -> None:
        self._run_log(["--predicate", '(process == "loginwindow")', "--last", "1m"])

    def fetch_activities(self, target_date: date) -> list[Activity]:
        day = target_date.isoformat()
        output = self._run_log(
            [
                "--start",
                f"{day} 00:00:00",
                "--end",
                f"{day} 23:59:59",
                "--predicate",
                '(process == "loginwindow" AND eventMessage CONTAINS "setScreenIsLocked")',
            ]
        )
        return self.limit(parse_log_output(output, target_date))
