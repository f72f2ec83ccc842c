#
# config/models.py
#
"""
Attrs-based data models for suitelog configuration structure.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Any

from attrs import define, field


class LoggingMode(Enum):
    """Which log destinations a router delivers to."""

    LOCAL = "local"
    PRECOMMIT = "precommit"
    BOTH = "both"

    @property
    def uses_local(self) -> bool:
        return self in (LoggingMode.LOCAL, LoggingMode.BOTH)

    @property
    def uses_precommit(self) -> bool:
        return self in (LoggingMode.PRECOMMIT, LoggingMode.BOTH)


def _validate_log_level(inst: Any, attr: Any, value: str) -> None:
    """Validator for standard logging level names."""
    valid = logging._nameToLevel.keys()
    if value.upper() not in valid:
        raise ValueError(f"Invalid log_level '{value}'. Must be one of {list(valid)}.")


def _validate_non_negative_int(inst: Any, attr: Any, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"Field '{attr.name}' must be a non-negative integer, got {value}")


def _validate_name(inst: Any, attr: Any, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Field '{attr.name}' must be a non-empty string, got {value!r}")


@define(frozen=True, slots=True)
class LoggingConfig:
    """
    Settings for one suite's logging session.

    ``hook_active`` is resolved by the caller (normally the CLI) from the
    environment; nothing below the CLI inspects the environment itself.
    """

    log_file_name: str = field(validator=_validate_name)
    test_suite_dir: str = field(validator=_validate_name)
    log_folder_name: str = field(default="logs", validator=_validate_name)
    mode: LoggingMode = field(default=LoggingMode.LOCAL, converter=LoggingMode)
    hook_active: bool = field(default=False)
    failure_log_name: str = field(default="allFailedTests.log", validator=_validate_name)
    truncate_failure_log: bool = field(default=False)
    timestamps: bool = field(default=False)
    trim_stacks: bool = field(default=False)
    base_dir: Path | None = field(default=None)
    context_lines: int = field(default=2, validator=_validate_non_negative_int)

    def root_dir(self) -> Path:
        """Directory the log folder is created under."""
        return Path(self.base_dir) if self.base_dir is not None else Path.cwd()

    @property
    def logs_dir(self) -> Path:
        return self.root_dir() / self.log_folder_name

    @property
    def suite_log_path(self) -> Path:
        return self.logs_dir / self.test_suite_dir / self.log_file_name

    @property
    def failure_log_path(self) -> Path:
        return self.logs_dir / self.failure_log_name


@define(frozen=True, slots=True)
class GlobalConfig:
    """Global default settings for suitelog."""
    log_level: str = field(default="INFO", validator=_validate_log_level)

    @property
    def numeric_log_level(self) -> int:
        return logging.getLevelName(self.log_level.upper())


@define(frozen=True, slots=True)
class SuitelogConfig:
    """Root configuration object loaded from a suitelog TOML file."""
    logging_config: LoggingConfig | None = field(default=None, metadata={"toml_name": "logging"})
    global_config: GlobalConfig = field(factory=GlobalConfig, metadata={"toml_name": "global"})


# 🔼⚙️
