#
# tests/unit/test_config.py
#
"""
Tests for configuration models and TOML loading.
"""

from pathlib import Path

import pytest

from suitelog.config import LoggingConfig, LoggingMode, load_config
from suitelog.exceptions import ConfigurationError


class TestLoggingConfig:
    def test_defaults(self, tmp_path: Path) -> None:
        config = LoggingConfig(log_file_name="run.log", test_suite_dir="math", base_dir=tmp_path)

        assert config.mode is LoggingMode.LOCAL
        assert config.log_folder_name == "logs"
        assert config.hook_active is False
        assert config.suite_log_path == tmp_path / "logs" / "math" / "run.log"
        assert config.failure_log_path == tmp_path / "logs" / "allFailedTests.log"

    def test_base_dir_defaults_to_working_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        config = LoggingConfig(log_file_name="run.log", test_suite_dir="math")

        assert config.logs_dir == tmp_path / "logs"

    @pytest.mark.parametrize(
        ("mode", "local", "precommit"),
        [("local", True, False), ("precommit", False, True), ("both", True, True)],
    )
    def test_mode_flags(self, mode: str, local: bool, precommit: bool) -> None:
        config = LoggingConfig(log_file_name="a.log", test_suite_dir="s", mode=mode)

        assert config.mode.uses_local is local
        assert config.mode.uses_precommit is precommit

    @pytest.mark.parametrize(
        "overrides",
        [{"mode": "remote"}, {"log_file_name": " "}, {"context_lines": -1}],
    )
    def test_invalid_values(self, overrides) -> None:
        fields = {"log_file_name": "a.log", "test_suite_dir": "s"}
        fields.update(overrides)

        with pytest.raises(ValueError):
            LoggingConfig(**fields)


class TestLoadConfig:
    def test_loads_logging_and_global_tables(self, tmp_path: Path) -> None:
        config_file = tmp_path / "suitelog.toml"
        config_file.write_text(
            """
            [global]
            log_level = "DEBUG"

            [logging]
            log_file_name = "math.log"
            test_suite_dir = "math"
            mode = "both"
            base_dir = "out"
            truncate_failure_log = true
            """
        )

        config = load_config(config_file)

        assert config.global_config.numeric_log_level == 10
        logging_config = config.logging_config
        assert logging_config.mode is LoggingMode.BOTH
        assert logging_config.truncate_failure_log is True
        assert logging_config.base_dir == tmp_path / "out"

    def test_logging_table_is_optional(self, tmp_path: Path) -> None:
        config_file = tmp_path / "suitelog.toml"
        config_file.write_text("[global]\nlog_level = 'INFO'\n")

        assert load_config(config_file).logging_config is None

    def test_unknown_option(self, tmp_path: Path) -> None:
        config_file = tmp_path / "suitelog.toml"
        config_file.write_text("[logging]\nlog_file_name = 'a'\ntest_suite_dir = 'b'\ncolour = true\n")

        with pytest.raises(ConfigurationError, match="colour"):
            load_config(config_file)

    def test_invalid_value(self, tmp_path: Path) -> None:
        config_file = tmp_path / "suitelog.toml"
        config_file.write_text("[logging]\nlog_file_name = 'a'\ntest_suite_dir = 'b'\nmode = 'remote'\n")

        with pytest.raises(ConfigurationError):
            load_config(config_file)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "suitelog.toml"
        config_file.write_text('[logging "missing bracket')

        with pytest.raises(ConfigurationError, match="TOML"):
            load_config(config_file)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "absent.toml")
