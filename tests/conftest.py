# tests/conftest.py

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from suitelog.config import LoggingConfig
from suitelog.models import TestError, TestResult

SOURCE_LINES = [f"line {n}" for n in range(1, 11)]


@pytest.fixture(autouse=True)
def detach_cli_log_handlers():
    """Removes handlers installed by setup_logging once a test is done."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    """A ten-line source file with no trailing newline."""
    path = tmp_path / "test_math.py"
    path.write_text("\n".join(SOURCE_LINES), encoding="utf-8")
    return path


@pytest.fixture
def make_result(source_file: Path) -> Callable[..., TestResult]:
    """Factory for TestResult records pointing at ``source_file``."""

    def _make(
        test_name: str = "adds numbers",
        status: str = "passed",
        duration_ms: float = 1,
        operation_type: str = "get",
        source_line: int = 5,
        error: TestError | None = None,
        payload: Any = None,
        file: str | None = None,
    ) -> TestResult:
        return TestResult(
            test_name=test_name,
            operation_type=operation_type,
            status=status,
            duration_ms=duration_ms,
            source_line=source_line,
            source_file=file or str(source_file),
            error=error,
            payload=payload,
        )

    return _make


@pytest.fixture
def logging_config(tmp_path: Path) -> LoggingConfig:
    return LoggingConfig(
        log_file_name="suite.log",
        test_suite_dir="math",
        base_dir=tmp_path,
    )
