"""Connector interface."""

from datetime import date
from typing import Mapping, Protocol

from arkeo.core.activity import Activity


class Connector(Protocol):
    """Interface for fetching activities from any source."""

    name: str
    description: str
    enabled: bool

    def required_config(self) -> list:
        """Declarative list of ConfigField this connector accepts."""
        ...

    def configure(self, config: Mapping[str, object]) -> None:
        """Merge, validate and apply settings. Raises ConnectorConfigError."""
        ...

    def fetch_activities(self, target_date: date) -> list[Activity]:
        """Fetch activities for a specific date. Raises ConnectorError."""
        ...

    def test_connection(self) -> None:
        """Raise ConnectorError if the source is unreachable."""
        ...
