"""Shared connector plumbing: declarative config fields, validation, HTTP session."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping

import requests

logger = logging.getLogger(__name__)


class ConnectorConfigError(ValueError):
    """Raised when a connector's configuration is invalid."""

    pass


class ConnectorError(RuntimeError):
    """Raised when a connector fails to reach or read its source."""

    pass


@dataclass(frozen=True)
class ConfigField:
    """A configuration field a connector accepts."""

    key: str
    type: str  # string | secret | int | bool | list
    required: bool = False
    description: str = ""
    default: object = None


COMMON_CONFIG_FIELDS = (
    ConfigField("log_level", "string", description="Log level (debug, info, warning, error)", default="info"),
    ConfigField("debug_mode", "bool", description="Enable debug mode", default=False),
    ConfigField("max_items", "int", description="Maximum number of items to fetch (0 for unlimited)", default=100),
    ConfigField("timeout", "int", description="Timeout in seconds for API requests", default=30),
)


def merge_config_fields(fields: list[ConfigField]) -> list[ConfigField]:
    """A connector's own fields followed by any common field it doesn't override."""
    own_keys = {f.key for f in fields}
    return list(fields) + [f for f in COMMON_CONFIG_FIELDS if f.key not in own_keys]


def _check_type(field: ConfigField, value: object) -> str | None:
    """Error message if value doesn't match the field type, else None."""
    match field.type:
        case "string" | "secret":
            if not isinstance(value, str) or (field.required and not value):
                kind = "secret" if field.type == "secret" else "string"
                return f"field '{field.key}' must be a non-empty {kind}"
        case "int":
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return f"field '{field.key}' must be an integer"
        case "bool":
            if not isinstance(value, bool):
                return f"field '{field.key}' must be a boolean"
        case "list":
            if not isinstance(value, list):
                return f"field '{field.key}' must be a list"
    return None


def validate_config_fields(config: Mapping[str, object], fields: list[ConfigField]) -> None:
    """
    Validate a config mapping against a declarative field list.

    Required fields must be present and non-empty; any present value must
    match its field's type.
    """
    for field in fields:
        value = config.get(field.key)
        if value is None:
            if field.required:
                raise ConnectorConfigError(f"required field '{field.key}' is missing")
            continue

        error = _check_type(field, value)
        if error:
            raise ConnectorConfigError(error)


class BaseConnector:
    """
    Common connector behavior.

    Subclasses set `name`/`description`, list their own fields in `FIELDS`
    and implement fetch_activities / test_connection.
    """

    name = ""
    description = ""
    FIELDS: tuple[ConfigField, ...] = ()

    def __init__(self, session: requests.Session | None = None):
        self.enabled = False
        self.config: dict[str, object] = {f.key: f.default for f in self.required_config() if f.default is not None}
        self._session = session or requests.Session()

    def required_config(self) -> list[ConfigField]:
        return merge_config_fields(list(self.FIELDS))

    def validate_config(self, config: Mapping[str, object]) -> None:
        validate_config_fields(config, self.required_config())

    def configure(self, config: Mapping[str, object]) -> None:
        """Merge new values over current ones, validate, then apply."""
        merged = {**self.config, **config}
        self.validate_config(merged)
        self.config = merged

    @property
    def timeout(self) -> int:
        return self.get_int("timeout") or 30

    def get_str(self, key: str) -> str:
        value = self.config.get(key)
        return value if isinstance(value, str) else ""

    def get_bool(self, key: str) -> bool:
        return self.config.get(key) is True

    def get_int(self, key: str) -> int:
        value = self.config.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0
        return int(value)

    def _get_json(self, url: str, token: str, params: dict | None = None, headers: dict | None = None):
        """Authenticated GET returning decoded JSON. Raises ConnectorError."""
        request_headers = {"Authorization": f"Bearer {token}", "Accept": "application/json"}
        request_headers.update(headers or {})
        try:
            resp = self._session.get(url, params=params, headers=request_headers, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            raise ConnectorError(f"{self.name}: request to {url} failed: {e}") from e
        except ValueError as e:
            raise ConnectorError(f"{self.name}: invalid JSON from {url}: {e}") from e

    def limit(self, activities: list) -> list:
        """Apply the connector's max_items setting."""
        max_items = self.get_int("max_items")
        if max_items > 0 and len(activities) > max_items:
            logger.debug(f"{self.name}: limiting activities from {len(activities)} to {max_items}")
            return activities[:max_items]
        return activities


def parse_timestamp(value: str) -> datetime:
    """
    Parse an RFC 3339 / ISO timestamp into a naive local datetime.

    Timeline days are compared in local time, so aware values are converted
    and then stripped of tzinfo. Raises ValueError on malformed input.
    """
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed
