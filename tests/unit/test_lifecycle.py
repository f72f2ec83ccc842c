#
# tests/unit/test_lifecycle.py
#
"""
Tests for LifecycleManager sink ownership and teardown.
"""

import io
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest
from attrs import evolve

from suitelog.aggregator import ResultAggregator
from suitelog.config import LoggingConfig, LoggingMode
from suitelog.exceptions import ConfigurationError, LifecycleError
from suitelog.lifecycle import HandleState, LifecycleManager, LifecycleState
from suitelog.sinks import ConsoleSink, FileSink


class TestOpen:
    def test_local_mode_provisions_files(self, logging_config: LoggingConfig, tmp_path: Path) -> None:
        manager = LifecycleManager()

        handle = manager.open(logging_config)

        assert manager.state is LifecycleState.OPEN
        assert handle.state is HandleState.OPEN
        assert (tmp_path / "logs" / "math" / "suite.log").exists()
        assert (tmp_path / "logs" / "allFailedTests.log").exists()
        assert len(handle.sinks) == 2
        assert all(isinstance(s, FileSink) for s in handle.sinks)
        manager.close(handle)

    def test_precommit_mode_without_hook_has_no_sinks(
        self, logging_config: LoggingConfig, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config = evolve(logging_config, mode=LoggingMode.PRECOMMIT, hook_active=False)
        manager = LifecycleManager()

        with manager.session(config) as handle:
            handle.router.log("3 passed")

            assert handle.sinks == ()
        assert "[Pre-commit]" not in capsys.readouterr().out
        assert not (tmp_path / "logs").exists()

    def test_precommit_mode_with_hook_writes_console(self, logging_config: LoggingConfig) -> None:
        stream = io.StringIO()
        config = evolve(logging_config, mode="precommit", hook_active=True)
        manager = LifecycleManager(console_stream=stream)

        with manager.session(config) as handle:
            handle.router.log("3 passed")

            assert len(handle.sinks) == 1
            assert isinstance(handle.sinks[0], ConsoleSink)
        assert stream.getvalue() == "[Pre-commit] 3 passed\n"

    def test_both_mode_opens_every_sink(self, logging_config: LoggingConfig) -> None:
        config = evolve(logging_config, mode=LoggingMode.BOTH, hook_active=True)
        manager = LifecycleManager(console_stream=io.StringIO())

        with manager.session(config) as handle:
            assert [type(s) for s in handle.sinks] == [FileSink, ConsoleSink, FileSink]

    def test_second_open_of_same_target_is_rejected(self, logging_config: LoggingConfig) -> None:
        manager = LifecycleManager()
        handle = manager.open(logging_config)

        with pytest.raises(LifecycleError):
            manager.open(logging_config)

        assert manager.handles == (handle,)
        manager.close(handle)

    def test_target_can_be_reopened_after_close(self, logging_config: LoggingConfig) -> None:
        manager = LifecycleManager()
        manager.close(manager.open(logging_config))

        handle = manager.open(logging_config)

        assert not handle.closed
        manager.close_all()

    def test_unwritable_root_fails_open(self, logging_config: LoggingConfig, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not directory")
        manager = LifecycleManager()

        with pytest.raises(ConfigurationError):
            manager.open(evolve(logging_config, base_dir=blocker))

        assert manager.handles == ()
        assert manager.state is LifecycleState.UNINITIALIZED

    def test_partial_open_closes_sinks_that_opened(
        self, logging_config: LoggingConfig, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        # A directory where the failure log should be makes only that sink fail.
        logging_config.failure_log_path.mkdir(parents=True)
        closed: list[Path] = []
        original_close = FileSink.close

        def spy_close(self: FileSink) -> None:
            closed.append(self.path)
            original_close(self)

        monkeypatch.setattr(FileSink, "close", spy_close)

        with pytest.raises(ConfigurationError):
            LifecycleManager().open(logging_config)

        assert logging_config.suite_log_path in closed


class TestClose:
    def test_close_before_open_is_noop(self) -> None:
        manager = LifecycleManager()

        manager.close()

        assert manager.state is LifecycleState.UNINITIALIZED

    def test_close_twice_is_idempotent(self, logging_config: LoggingConfig) -> None:
        manager = LifecycleManager()
        handle = manager.open(logging_config)

        manager.close(handle)
        manager.close(handle)

        assert handle.closed
        assert handle.router.open_sinks == 0
        assert manager.state is LifecycleState.CLOSED

    def test_close_all_closes_every_handle(self, logging_config: LoggingConfig) -> None:
        manager = LifecycleManager()
        first = manager.open(logging_config)
        second = manager.open(evolve(logging_config, test_suite_dir="strings"))

        manager.close_all()

        assert first.closed and second.closed
        assert all(s.closed for s in first.sinks + second.sinks)
        assert manager.handles == ()

    def test_session_closes_on_error(self, logging_config: LoggingConfig) -> None:
        manager = LifecycleManager()

        with pytest.raises(RuntimeError):
            with manager.session(logging_config) as handle:
                raise RuntimeError("test harness crashed")

        assert handle.closed
        assert manager.state is LifecycleState.CLOSED


class TestSuites:
    def test_failure_log_accumulates_across_suites(self, logging_config: LoggingConfig, make_result) -> None:
        manager = LifecycleManager()
        for suite in ("math", "strings"):
            config = evolve(logging_config, test_suite_dir=suite)
            with manager.session(config) as handle:
                aggregator = ResultAggregator(handle.router, suite_name=suite)
                aggregator.record(make_result(f"{suite} test", status="failed"))
                aggregator.flush()

        failures = logging_config.failure_log_path.read_text(encoding="utf-8")
        assert "Test summary for math:" in failures
        assert "Test summary for strings:" in failures

    def test_truncate_failure_log_starts_afresh(self, logging_config: LoggingConfig) -> None:
        logging_config.failure_log_path.parent.mkdir(parents=True)
        logging_config.failure_log_path.write_text("stale run\n", encoding="utf-8")
        manager = LifecycleManager()

        manager.close(manager.open(evolve(logging_config, truncate_failure_log=True)))

        assert logging_config.failure_log_path.read_text(encoding="utf-8") == ""

    def test_suite_transcript_is_overwritten_each_run(self, logging_config: LoggingConfig) -> None:
        manager = LifecycleManager()
        with manager.session(logging_config) as handle:
            handle.router.log("first run")
        with manager.session(logging_config) as handle:
            handle.router.log("second run")

        assert logging_config.suite_log_path.read_text(encoding="utf-8") == "second run\n"

    def test_consecutive_suites_sharing_a_router(self, logging_config: LoggingConfig, make_result) -> None:
        manager = LifecycleManager()
        with manager.session(logging_config) as handle:
            aggregator = ResultAggregator(handle.router)

            aggregator.record(make_result("suite one test"))
            aggregator.flush()
            after_first = logging_config.suite_log_path.read_text(encoding="utf-8")

            aggregator.record(make_result("suite two test"))
            second = aggregator.flush()

        assert "suite one test" in after_first
        assert "suite two test" not in after_first
        assert "suite one test" not in second.report


class TestExitHooks:
    def test_uncaught_exception_is_logged_and_handles_closed(
        self, logging_config: LoggingConfig, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        previous = Mock()
        monkeypatch.setattr(sys, "excepthook", previous)
        manager = LifecycleManager()
        handle = manager.open(logging_config)
        restore = manager.install_exit_hooks()

        error = ValueError("bad payload")
        sys.excepthook(ValueError, error, None)

        assert handle.closed
        previous.assert_called_once_with(ValueError, error, None)
        transcript = logging_config.suite_log_path.read_text(encoding="utf-8")
        assert "Uncaught Exception: ValueError: bad payload" in transcript

        restore()
        assert sys.excepthook is previous

    def test_install_is_idempotent(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "excepthook", Mock())
        manager = LifecycleManager()

        restore = manager.install_exit_hooks()

        assert manager.install_exit_hooks() is restore
        restore()
