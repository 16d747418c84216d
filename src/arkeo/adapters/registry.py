"""Connector registry - name to factory mapping and config-driven setup."""

import logging
from typing import Callable

from arkeo.config import Config
from arkeo.ports.connector import Connector

from .base import ConnectorConfigError
from .github import GitHubConnector
from .macos_system import MacOSSystemConnector
from .webhooks import WebhooksConnector

logger = logging.getLogger(__name__)

CONNECTOR_FACTORIES: dict[str, Callable[[], Connector]] = {
    "github": GitHubConnector,
    "macos_system": MacOSSystemConnector,
    "webhooks": WebhooksConnector,
}


class ConnectorRegistry:
    """Holds one instance per known connector, keyed by name."""

    def __init__(self):
        self._connectors: dict[str, Connector] = {}

    def register(self, connector: Connector) -> None:
        self._connectors[connector.name] = connector

    def get(self, name: str) -> Connector | None:
        return self._connectors.get(name)

    def all(self) -> list[Connector]:
        return [self._connectors[name] for name in sorted(self._connectors)]

    def enabled(self) -> list[Connector]:
        return [c for c in self.all() if c.enabled]


def build_registry(
    config: Config,
    factories: dict[str, Callable[[], Connector]] | None = None,
) -> ConnectorRegistry:
    """
    Instantiate every known connector and configure the enabled ones.

    A connector listed in CONNECTORS whose settings fail validation is logged
    and stays disabled.
    """
    factories = factories if factories is not None else CONNECTOR_FACTORIES
    registry = ConnectorRegistry()

    for name, factory in factories.items():
        connector = factory()
        registry.register(connector)

        if not config.is_enabled(name):
            continue

        try:
            connector.configure(config.connector_config(name))
        except ConnectorConfigError as e:
            logger.warning(f"Connector '{name}' disabled: {e}")
            continue

        connector.enabled = True
        logger.debug(f"Connector '{name}' enabled")

    for name in config.enabled_connectors:
        if name not in factories:
            logger.warning(f"Unknown connector in config: {name}")

    return registry
