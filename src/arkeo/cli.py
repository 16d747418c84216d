"""arkeo CLI - activity timelines from your tools."""

import logging
import sys
from datetime import date

import click

from .adapters.base import ConnectorConfigError, ConnectorError
from .adapters.registry import build_registry
from .config import CONFIG_FILE, Config, load_config
from .render import FORMATS, RenderError, render, render_summary
from .workflows import build_timeline, fetch_week, render_options

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _target_date(value) -> date:
    return value.date() if value else date.today()


@click.group()
@click.version_option(package_name="arkeo")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """arkeo - Activity timeline CLI."""
    try:
        config = load_config()
    except ValueError as e:
        click.echo(f"Error: invalid {CONFIG_FILE}: {e}", err=True)
        sys.exit(1)
    level = logging.DEBUG if debug else getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(format=LOG_FORMAT, level=level)
    ctx.obj = config


@main.command()
@click.option("--date", "day", type=click.DateTime(formats=["%Y-%m-%d"]), help="Date to show (default: today)")
@click.option("--week", is_flag=True, help="Show the whole week grouped by day")
@click.option("--format", "fmt", type=click.Choice(FORMATS), default=None, help="Output format")
@click.option("--max", "max_items", type=int, default=None, help="Maximum activities to show (0 for all)")
@click.option("--details/--no-details", default=None, help="Show descriptions, durations and URLs")
@click.option("--colors/--no-colors", default=None, help="Colorize table output")
@click.pass_obj
def timeline(config: Config, day, week: bool, fmt: str | None, max_items: int | None, details, colors):
    """Show the activity timeline for a day or week."""
    target = _target_date(day)
    fmt = fmt or config.default_format
    options = render_options(
        config,
        max_items=max_items,
        show_details=details,
        use_colors=colors,
        group_by_day=week or None,
    )

    try:
        if week:
            activities, days = fetch_week(config, target)
            render(activities, fmt, options, days=days)
        else:
            render(build_timeline(config, target), fmt, options)
    except RenderError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option("--date", "day", type=click.DateTime(formats=["%Y-%m-%d"]), help="Date to summarize (default: today)")
@click.pass_obj
def summary(config: Config, day):
    """Show activity counts for a day."""
    render_summary(build_timeline(config, _target_date(day)))


@main.group()
def connectors():
    """Inspect and test connectors."""
    pass


@connectors.command("list")
@click.pass_obj
def connectors_list(config: Config):
    """List available connectors."""
    registry = build_registry(config)
    for connector in registry.all():
        status = "✓" if connector.enabled else " "
        click.echo(f"  {status} {connector.name:<14} {connector.description}")


@connectors.command("info")
@click.argument("name")
@click.pass_obj
def connectors_info(config: Config, name: str):
    """Show a connector's configuration fields."""
    connector = build_registry(config).get(name)
    if connector is None:
        click.echo(f"Error: unknown connector '{name}'", err=True)
        sys.exit(1)

    click.echo(f"{connector.name} - {connector.description}")
    click.echo(f"Enabled: {'yes' if connector.enabled else 'no'}")
    click.echo()
    click.echo("Configuration:")
    for field in connector.required_config():
        required = " (required)" if field.required else ""
        default = f" [default: {field.default}]" if field.default is not None else ""
        click.echo(f"  {name}.{field.key:<18} {field.type:<7} {field.description}{required}{default}")


@connectors.command("test")
@click.argument("name")
@click.pass_obj
def connectors_test(config: Config, name: str):
    """Check a connector's config and connection."""
    connector = build_registry(config).get(name)
    if connector is None:
        click.echo(f"Error: unknown connector '{name}'", err=True)
        sys.exit(1)

    try:
        connector.configure(config.connector_config(name))
        connector.test_connection()
    except (ConnectorConfigError, ConnectorError) as e:
        click.echo(f"  ✗ {name}: {e}", err=True)
        sys.exit(1)

    click.echo(f"  ✓ {name}: connection OK")


@main.group("config")
def config_group():
    """Show or validate arkeo.conf."""
    pass


@config_group.command("show")
@click.pass_obj
def config_show(config: Config):
    """Print the effective configuration (secrets masked)."""
    click.echo(f"Config file: {CONFIG_FILE}{'' if CONFIG_FILE.exists() else ' (not found, using defaults)'}")
    click.echo()
    click.echo(f"  log_level        {config.log_level}")
    click.echo(f"  default_format   {config.default_format}")
    click.echo(f"  max_items        {config.max_items}")
    click.echo(f"  show_details     {config.show_details}")
    click.echo(f"  use_colors       {config.use_colors}")
    click.echo(f"  include_weekend  {config.include_weekend}")
    click.echo(f"  parallel_fetch   {config.parallel_fetch}")
    click.echo(f"  fetch_timeout    {config.fetch_timeout}")
    click.echo(f"  max_concurrency  {config.max_concurrency}")
    click.echo(f"  connectors       {', '.join(config.enabled_connectors) or '(none)'}")

    registry = build_registry(config)
    for name, values in sorted(config.connectors.items()):
        connector = registry.get(name)
        secrets = {f.key for f in connector.required_config() if f.type == "secret"} if connector else set()
        click.echo()
        click.echo(f"  [{name}]")
        for key, value in sorted(values.items()):
            shown = "********" if key in secrets and value else value
            click.echo(f"    {key:<16} {shown}")


@config_group.command("validate")
@click.pass_obj
def config_validate(config: Config):
    """Validate settings of every enabled connector."""
    registry = build_registry(config)
    failed = False

    if config.default_format not in FORMATS:
        click.echo(f"  ✗ default_format: unknown format '{config.default_format}'", err=True)
        failed = True

    for name in config.enabled_connectors:
        connector = registry.get(name)
        if connector is None:
            click.echo(f"  ✗ {name}: unknown connector", err=True)
            failed = True
            continue
        try:
            connector.validate_config({**connector.config, **config.connector_config(name)})
        except ConnectorConfigError as e:
            click.echo(f"  ✗ {name}: {e}", err=True)
            failed = True
            continue
        click.echo(f"  ✓ {name}")

    if failed:
        sys.exit(1)
    click.echo("Configuration is valid.")


if __name__ == "__main__":
    main()
