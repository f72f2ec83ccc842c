# src/suitelog/cli/report_cmds.py

"""
Commands that render test results and source context.

This is the boundary where the environment is inspected: the commit-hook
marker is resolved here and handed to the core as ``hook_active``.
"""

import os
from pathlib import Path
from typing import Any

import click
import structlog
from attrs import evolve

from suitelog.aggregator import ResultAggregator
from suitelog.config import LoggingConfig, LoggingMode, load_config
from suitelog.diagnostics import extract_code_context
from suitelog.exceptions import ConfigurationError, ResultFormatError
from suitelog.ingest import load_results
from suitelog.lifecycle import LifecycleManager
from suitelog.precommit import DEFAULT_HOOK_MARKERS, enforce_gate, hook_marker_present
from suitelog.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.report")


def build_logging_config(
    results_path: Path,
    config_path: Path | None,
    overrides: dict[str, Any],
    hook_active: bool,
) -> LoggingConfig:
    """Merges config file settings with CLI overrides (CLI wins)."""
    base: LoggingConfig | None = None
    if config_path is not None:
        base = load_config(config_path).logging_config

    overrides = {k: v for k, v in overrides.items() if v is not None}
    overrides["hook_active"] = hook_active

    try:
        if base is not None:
            return evolve(base, **overrides)
        overrides.setdefault("test_suite_dir", results_path.stem)
        overrides.setdefault("log_file_name", f"{results_path.stem}.log")
        return LoggingConfig(**overrides)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid logging options: {e}", details=e) from e


@click.command(name="report")
@click.argument(
    "results_path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path),
)
@click.option(
    "-c",
    "--config-path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path),
    default=None,
    envvar="SUITELOG_CONF",
    show_envvar=True,
    help="Path to a suitelog TOML configuration file.",
)
@click.option("--log-file-name", default=None, envvar="SUITELOG_LOG_FILE_NAME", help="Suite transcript file name.")
@click.option("--suite-dir", default=None, envvar="SUITELOG_SUITE_DIR", help="Sub-directory of the log folder for this suite.")
@click.option("--log-folder", default=None, envvar="SUITELOG_LOG_FOLDER", help="Log root folder [default: logs].")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in LoggingMode], case_sensitive=False),
    default=None,
    envvar="SUITELOG_MODE",
    help="Where reports go [default: local].",
)
@click.option(
    "--truncate-failure-log",
    is_flag=True,
    default=None,
    help="Start the cumulative failure log afresh instead of appending.",
)
@click.option("--timestamps", is_flag=True, default=None, help="Timestamp each suite transcript line.")
@click.option("--trim-stacks", is_flag=True, default=None, help="Show only stack frames from the failing test file.")
@click.option(
    "--hook-env-var",
    "hook_env_vars",
    multiple=True,
    default=DEFAULT_HOOK_MARKERS,
    show_default=True,
    help="Environment variable whose presence marks a commit-hook run.",
)
@click.pass_context
def report_cmd(
    ctx: click.Context,
    results_path: Path,
    config_path: Path | None,
    log_file_name: str | None,
    suite_dir: str | None,
    log_folder: str | None,
    mode: str | None,
    truncate_failure_log: bool | None,
    timestamps: bool | None,
    trim_stacks: bool | None,
    hook_env_vars: tuple[str, ...],
):
    """Render a suite report from a JSON results file."""
    hook_active = hook_marker_present(os.environ, hook_env_vars)
    report_log = log.bind(results=str(results_path), hook_active=hook_active)

    try:
        config = build_logging_config(
            results_path,
            config_path,
            {
                "log_file_name": log_file_name,
                "test_suite_dir": suite_dir,
                "log_folder_name": log_folder,
                "mode": mode.lower() if mode else None,
                "truncate_failure_log": truncate_failure_log,
                "timestamps": timestamps,
                "trim_stacks": trim_stacks,
            },
            hook_active,
        )
        results = load_results(results_path)
    except (ConfigurationError, ResultFormatError) as e:
        report_log.error("Cannot build report", error=str(e))
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    manager = LifecycleManager()
    try:
        with manager.session(config) as handle:
            aggregator = ResultAggregator(
                handle.router,
                suite_name=config.test_suite_dir,
                context_lines=config.context_lines,
                base_dir=config.base_dir,
                trim_stacks=config.trim_stacks,
            )
            for result in results:
                aggregator.record(result)
            summary = aggregator.flush()
            enforce_gate(summary, config, handle.router)
    except ConfigurationError as e:
        report_log.error("Failed to open log sinks", error=str(e))
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    report_log.info("Report complete", failed=summary.failed, total=summary.total)
    if config.mode.uses_local:
        click.echo(
            f"{summary.failed} failed, {summary.passed} passed, {summary.total} total. "
            f"Report written to {config.suite_log_path}"
        )


@click.command(name="context")
@click.argument("file_path", type=click.Path(path_type=Path))
@click.argument("line_number", type=int)
@click.option("-n", "--context-lines", type=click.IntRange(min=0), default=2, show_default=True)
@click.option("--column", type=click.IntRange(min=1), default=None, help="Column to mark with a caret.")
def context_cmd(file_path: Path, line_number: int, context_lines: int, column: int | None):
    """Print the source lines around FILE_PATH:LINE_NUMBER."""
    click.echo(extract_code_context(file_path, line_number, context_lines=context_lines, column=column))

# 🔼⚙️
