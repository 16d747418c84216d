"""Webhooks adapter - pull activities from user-defined HTTP endpoints."""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Mapping
from urllib.parse import urlparse

from arkeo.core.activity import Activity

from .base import BaseConnector, ConfigField, ConnectorConfigError, ConnectorError, parse_timestamp

logger = logging.getLogger(__name__)

DEFAULT_TYPE = "webhook"
DEFAULT_TITLE = "Webhook Activity"


@dataclass
class Webhook:
    """One configured endpoint."""

    name: str
    url: str
    token: str


def parse_webhooks(raw: object) -> list[Webhook]:
    """Turn the `webhooks` config value into Webhook entries. Raises ConnectorConfigError."""
    if not isinstance(raw, list):
        raise ConnectorConfigError(f"webhooks must be a list, got {type(raw).__name__}")

    webhooks = []
    for i, item in enumerate(raw):
        if not isinstance(item, Mapping):
            raise ConnectorConfigError(f"webhook {i}: invalid webhook config format")

        name = str(item.get("name") or "")
        url = str(item.get("url") or "")
        token = str(item.get("token") or "")
        if not name:
            raise ConnectorConfigError(f"webhook {i}: name is required")
        if not url:
            raise ConnectorConfigError(f"webhook {i} ({name}): url is required")
        if not token:
            raise ConnectorConfigError(f"webhook {i} ({name}): token is required")

        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConnectorConfigError(f"webhook {i} ({name}): invalid URL format: {url}")

        webhooks.append(Webhook(name=name, url=url, token=token))

    return webhooks


class WebhooksConnector(BaseConnector):
    """
    Webhooks connector.

    Each endpoint is called with GET <url>?date=YYYY-MM-DD and a bearer token
    and must answer with a JSON list of {timestamp, title, description, type,
    metadata} objects. An endpoint that fails is logged and skipped.
    """

    name = "webhooks"
    description = "Activities from webhook endpoints with bearer-token authentication"
    FIELDS = (
        ConfigField("webhooks", "list", required=True, description="List of webhooks (name, url, token)"),
    )

    def validate_config(self, config: Mapping[str, object]) -> None:
        super().validate_config(config)
        if not parse_webhooks(config["webhooks"]):
            raise ConnectorConfigError("at least one webhook must be configured")

    @property
    def webhooks(self) -> list[Webhook]:
        raw = self.config.get("webhooks")
        if raw is None:
            raise ConnectorError("webhooks: no webhooks configured")
        return parse_webhooks(raw)

    def test_connection(self) -> None:
        yesterday = date.today() - timedelta(days=1)
        for webhook in self.webhooks:
            try:
                self._fetch_raw(webhook, yesterday)
            except ConnectorError as e:
                raise ConnectorError(f"webhook '{webhook.name}' failed: {e}") from e

    def fetch_activities(self, target_date: date) -> list[Activity]:
        activities = []
        for webhook in self.webhooks:
            try:
                items = self._fetch_raw(webhook, target_date)
            except ConnectorError as e:
                logger.warning(f"Webhook '{webhook.name}' failed: {e}")
                continue

            converted = [a for a in (self._to_activity(item, webhook, i) for i, item in enumerate(items)) if a]
            logger.debug(f"Retrieved {len(converted)} activities from webhook: {webhook.name}")
            activities.extend(converted)

        return self.limit(activities)

    def _fetch_raw(self, webhook: Webhook, target_date: date) -> list:
        logger.debug(f"Fetching activities from webhook: {webhook.name} ({webhook.url})")
        data = self._get_json(webhook.url, webhook.token, params={"date": target_date.isoformat()})
        if not isinstance(data, list):
            raise ConnectorError(f"{webhook.name}: expected a JSON list, got {type(data).__name__}")
        return data

    def _to_activity(self, item: object, webhook: Webhook, index: int) -> Activity | None:
        if not isinstance(item, dict):
            logger.debug(f"Skipping invalid activity from {webhook.name}: not an object")
            return None

        try:
            timestamp = parse_timestamp(str(item.get("timestamp", "")))
        except ValueError:
            logger.debug(f"Skipping activity from {webhook.name}: invalid timestamp {item.get('timestamp')!r}")
            return None

        metadata = {"webhook_name": webhook.name}
        extra = item.get("metadata") or {}
        if not isinstance(extra, Mapping):
            logger.debug(f"Ignoring non-object metadata from {webhook.name}")
            extra = {}
        for key, value in extra.items():
            metadata[str(key)] = value if isinstance(value, str) else str(value)

        return Activity(
            id=str(item.get("id") or f"webhook-{webhook.name}-{int(timestamp.timestamp())}-{index}"),
            type=item.get("type") or DEFAULT_TYPE,
            title=item.get("title") or DEFAULT_TITLE,
            description=item.get("description") or "",
            timestamp=timestamp,
            source=self.name,
            url=item.get("url") or "",
            metadata=metadata,
        )
