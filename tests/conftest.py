"""Shared fixtures."""

from datetime import datetime, timedelta

import pytest

from arkeo.core.activity import Activity, ActivityType


@pytest.fixture
def make_activity():
    """Factory for activities with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(
        timestamp: datetime,
        title: str = "Did a thing",
        source: str = "github",
        type: str = ActivityType.GIT_COMMIT,
        duration: timedelta | None = None,
        **kwargs,
    ) -> Activity:
        return Activity(
            id=kwargs.pop("id", f"act-{next(counter)}"),
            type=type,
            title=title,
            timestamp=timestamp,
            source=source,
            duration=duration,
            **kwargs,
        )

    return _make
