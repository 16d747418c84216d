"""Configuration management for arkeo."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

ARKEO_HOME = Path(os.environ.get("ARKEO_HOME", Path.home() / ".config" / "arkeo"))
CONFIG_FILE = ARKEO_HOME / "arkeo.conf"


@dataclass
class Config:
    """arkeo configuration."""

    log_level: str = "info"
    default_format: str = "table"
    max_items: int = 500
    show_details: bool = False
    use_colors: bool = True
    include_weekend: bool = False
    # Fetching
    parallel_fetch: bool = True
    fetch_timeout: int = 300
    max_concurrency: int = 10
    # Connectors
    enabled_connectors: list[str] = field(default_factory=list)
    connectors: dict[str, dict[str, object]] = field(default_factory=dict)

    def is_enabled(self, name: str) -> bool:
        return name in self.enabled_connectors

    def connector_config(self, name: str) -> dict[str, object]:
        """Connector-specific settings (empty if none are configured)."""
        return dict(self.connectors.get(name, {}))


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from unquoted values."""
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_connector_value(value: str) -> object:
    """JSON for lists/objects, bools and ints for plain literals, else the string."""
    if value.startswith("[") or value.startswith("{"):
        return json.loads(value)
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit():
        return int(value)
    return value


def parse_config(text: str) -> Config:
    """Parse arkeo.conf content."""
    config = Config()

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "log_level":
                config.log_level = value.lower()
            case "default_format":
                config.default_format = value.lower()
            case "max_items":
                config.max_items = int(value)
            case "show_details":
                config.show_details = _parse_bool(value)
            case "use_colors":
                config.use_colors = _parse_bool(value)
            case "include_weekend":
                config.include_weekend = _parse_bool(value)
            case "parallel_fetch":
                config.parallel_fetch = _parse_bool(value)
            case "fetch_timeout":
                config.fetch_timeout = int(value)
            case "max_concurrency":
                config.max_concurrency = int(value)
            case "connectors":
                config.enabled_connectors = [c.strip() for c in value.split(",") if c.strip()]
            case _ if "." in key:
                # Connector settings: github.token=..., webhooks.webhooks=[...]
                connector, _, option = key.partition(".")
                try:
                    parsed = _parse_connector_value(value)
                except json.JSONDecodeError as e:
                    logger.warning(f"Failed to parse {key} JSON: {e}")
                    continue
                config.connectors.setdefault(connector, {})[option] = parsed
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config


def load_config(path: Path | None = None) -> Config:
    """Load configuration from arkeo.conf (defaults if the file is missing)."""
    path = path or CONFIG_FILE
    if not path.exists():
        return Config()
    return parse_config(path.read_text())
