"""Run connector fetches, in parallel by default."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeout
from dataclasses import dataclass, field
from datetime import date

from .adapters.base import ConnectorError
from .core.activity import Activity
from .ports.connector import Connector

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 10
DEFAULT_TIMEOUT = 300


@dataclass
class ConnectorResult:
    """Outcome of one connector fetch."""

    name: str
    activities: list[Activity] = field(default_factory=list)
    error: Exception | None = None
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None


def fetch_one(connector: Connector, target_date: date) -> ConnectorResult:
    """Fetch from a single connector. Connector errors and malformed payloads become the result's error."""
    start = time.monotonic()
    try:
        activities = connector.fetch_activities(target_date)
    except ConnectorError as e:
        return ConnectorResult(connector.name, error=e, elapsed=time.monotonic() - start)
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        # Malformed payload from the source
        error = ConnectorError(f"{connector.name}: unexpected response data: {e!r}")
        error.__cause__ = e
        return ConnectorResult(connector.name, error=error, elapsed=time.monotonic() - start)

    elapsed = time.monotonic() - start
    logger.debug(f"{connector.name}: {len(activities)} activities in {elapsed:.2f}s")
    return ConnectorResult(connector.name, activities, elapsed=elapsed)


def fetch_sequential(connectors: list[Connector], target_date: date) -> list[ConnectorResult]:
    return [fetch_one(c, target_date) for c in connectors]


def fetch_parallel(
    connectors: list[Connector],
    target_date: date,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[ConnectorResult]:
    """
    Fetch from all connectors concurrently.

    Results come back in connector order. Connectors still running when
    `timeout` seconds have passed get a timeout error result.
    """
    if not connectors:
        return []

    results: list[ConnectorResult | None] = [None] * len(connectors)
    executor = ThreadPoolExecutor(max_workers=max(1, min(max_concurrency, len(connectors))))
    futures = {executor.submit(fetch_one, c, target_date): i for i, c in enumerate(connectors)}

    try:
        for future in as_completed(futures, timeout=timeout):
            results[futures[future]] = future.result()
    except FuturesTimeout:
        for future, i in futures.items():
            if results[i] is None:
                future.cancel()
                name = connectors[i].name
                results[i] = ConnectorResult(
                    name, error=ConnectorError(f"{name}: timed out after {timeout}s"), elapsed=timeout
                )
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    return results


def collect_activities(results: list[ConnectorResult]) -> list[Activity]:
    """Merge successful results. Failures are logged and skipped."""
    activities = []
    for result in results:
        if not result.ok:
            logger.warning(f"Connector '{result.name}' failed: {result.error}")
            continue
        activities.extend(result.activities)
    return activities


def fetch_all(
    connectors: list[Connector],
    target_date: date,
    parallel: bool = True,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[ConnectorResult]:
    logger.debug(f"Fetching {target_date} from {len(connectors)} connectors (parallel={parallel})")
    if parallel and len(connectors) > 1:
        return fetch_parallel(connectors, target_date, max_concurrency, timeout)
    return fetch_sequential(connectors, target_date)
