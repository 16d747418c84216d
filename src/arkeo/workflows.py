"""Workflow layer between the CLI and connectors.

Each function takes a Config, fetches through the enabled connectors and
returns domain objects ready to render.
"""

import logging
from datetime import date

from .adapters.registry import ConnectorRegistry, build_registry
from .config import Config
from .core.activity import Activity, Timeline
from .core.grouping import week_days
from .fetch import collect_activities, fetch_all
from .render import RenderOptions

logger = logging.getLogger(__name__)


def render_options(config: Config, **overrides) -> RenderOptions:
    """RenderOptions from config defaults; None overrides are ignored."""
    options = RenderOptions(
        max_items=config.max_items,
        show_details=config.show_details,
        use_colors=config.use_colors,
    )
    for key, value in overrides.items():
        if value is not None:
            setattr(options, key, value)
    return options


def fetch_day(config: Config, target_date: date, registry: ConnectorRegistry | None = None) -> list[Activity]:
    """Activities from every enabled connector for one day, unsorted."""
    registry = registry or build_registry(config)
    connectors = registry.enabled()
    if not connectors:
        logger.warning("No connectors enabled - set CONNECTORS in arkeo.conf")
        return []

    results = fetch_all(
        connectors,
        target_date,
        parallel=config.parallel_fetch,
        max_concurrency=config.max_concurrency,
        timeout=config.fetch_timeout,
    )
    return collect_activities(results)


def build_timeline(config: Config, target_date: date, registry: ConnectorRegistry | None = None) -> Timeline:
    """Fetch a day and merge everything into one sorted Timeline."""
    timeline = Timeline(date=target_date)
    timeline.add_activities(fetch_day(config, target_date, registry))
    return timeline


def fetch_week(
    config: Config, target_date: date, registry: ConnectorRegistry | None = None
) -> tuple[list[Activity], list[date]]:
    """Activities for the week containing target_date, and that week's days."""
    registry = registry or build_registry(config)
    days = week_days(target_date, include_weekend=config.include_weekend)

    activities = []
    for day in days:
        activities.extend(fetch_day(config, day, registry))

    logger.debug(f"Fetched {len(activities)} activities for week of {days[0]}")
    return activities, days
