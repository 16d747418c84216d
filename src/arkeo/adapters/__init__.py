"""Adapters - I/O implementations of the connector port."""

from .base import (
    COMMON_CONFIG_FIELDS,
    BaseConnector,
    ConfigField,
    ConnectorConfigError,
    ConnectorError,
    merge_config_fields,
    validate_config_fields,
)
from .github import GitHubConnector
from .macos_system import MacOSSystemConnector
from .registry import CONNECTOR_FACTORIES, ConnectorRegistry, build_registry
from .webhooks import WebhooksConnector

__all__ = [
    # Shared
    "BaseConnector",
    "COMMON_CONFIG_FIELDS",
    "ConfigField",
    "ConnectorConfigError",
    "ConnectorError",
    "merge_config_fields",
    "validate_config_fields",
    # Connectors
    "GitHubConnector",
    "MacOSSystemConnector",
    "WebhooksConnector",
    # Registry
    "CONNECTOR_FACTORIES",
    "ConnectorRegistry",
    "build_registry",
]
