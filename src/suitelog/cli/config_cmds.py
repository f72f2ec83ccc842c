# src/suitelog/cli/config_cmds.py

from pathlib import Path

import click
import structlog
from rich.pretty import pretty_repr

from suitelog.config import load_config
from suitelog.exceptions import ConfigurationError
from suitelog.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.config")


@click.group(name="config")
def config_cli():
    """Commands for inspecting and validating configuration."""
    pass


@config_cli.command(name="show")
@click.option(
    "-c",
    "--config-path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path),
    default=Path("suitelog.toml"),
    show_default=True,
    envvar="SUITELOG_CONF",
    help="Path to the suitelog configuration file (env var SUITELOG_CONF).",
    show_envvar=True,
)
@click.pass_context
def show_config(ctx: click.Context, config_path: Path):
    """Load, validate, and display the configuration."""
    log.info("Executing 'config show' command", config_path=str(config_path))

    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        log.error("Failed to load or validate configuration", error=str(e))
        click.echo(f"Error: Configuration problem in '{config_path}':\n{e}", err=True)
        ctx.exit(1)

    click.echo(pretty_repr(config, expand_all=True))

    if config.logging_config is None:
        log.warning("No [logging] table found; report settings must come from CLI options.")

# 🔼⚙️
