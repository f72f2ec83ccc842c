#
# config/loader.py
#
"""
Loads suitelog configuration from a TOML file.
"""

import tomllib
from pathlib import Path
from typing import Any

import structlog
from attrs import evolve, fields

from suitelog.config.models import GlobalConfig, LoggingConfig, SuitelogConfig
from suitelog.exceptions import ConfigurationError

log = structlog.get_logger("config.loader")


def _build(model: type, table: Any, section: str) -> Any:
    if not isinstance(table, dict):
        raise ConfigurationError(f"Section [{section}] must be a table, got {type(table).__name__}")

    known = {a.name for a in fields(model)}
    unknown = sorted(set(table) - known)
    if unknown:
        raise ConfigurationError(f"Unknown option(s) in [{section}]: {', '.join(unknown)}")

    kwargs = dict(table)
    if model is LoggingConfig and "base_dir" in kwargs:
        kwargs["base_dir"] = Path(kwargs["base_dir"])
    try:
        return model(**kwargs)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid [{section}] configuration: {e}", details=e) from e


def load_config(config_path: Path) -> SuitelogConfig:
    """
    Reads and validates a suitelog configuration file.

    The file may contain a ``[global]`` table and a ``[logging]`` table whose
    keys match the LoggingConfig field names. A relative ``base_dir`` is
    resolved against the directory holding the config file.
    """
    config_path = Path(config_path)
    log.debug("Loading configuration", path=str(config_path))

    try:
        raw = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: '{config_path}'", details=e) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in '{config_path}': {e}", details=e) from e
    except OSError as e:
        raise ConfigurationError(f"Could not read config file '{config_path}': {e}", details=e) from e

    global_config = _build(GlobalConfig, raw.get("global", {}), "global")

    logging_config = None
    if "logging" in raw:
        logging_config = _build(LoggingConfig, raw["logging"], "logging")
        base_dir = logging_config.base_dir
        if base_dir is not None and not base_dir.is_absolute():
            logging_config = evolve(logging_config, base_dir=config_path.parent / base_dir)

    log.info(
        "Configuration loaded",
        path=str(config_path),
        has_logging=logging_config is not None,
        log_level=global_config.log_level,
    )
    return SuitelogConfig(logging_config=logging_config, global_config=global_config)


# 🔼⚙️
