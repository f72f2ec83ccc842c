# src/suitelog/models.py
#
"""
Data models for test results and the reports derived from them.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from attrs import define, field
from attrs.validators import ge, instance_of

from suitelog.exceptions import ResultFormatError


class OperationType(Enum):
    """Kind of operation a test result was observed for."""

    GET = "get"
    UPDATE = "update"
    REMOVE = "remove"


class ResultStatus(Enum):
    """Outcome of a single observed operation or of a grouped test."""

    PASSED = "passed"
    FAILED = "failed"


def _validate_source_line(inst: Any, attr: Any, value: int) -> None:
    """Validator ensures the source line is a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Field '{attr.name}' must be an integer >= 1, got {value!r}")


@define(frozen=True, slots=True)
class TestError:
    """Error details attached to a failed result. Both fields are optional."""

    __test__ = False

    message: str | None = field(default=None)
    stack: str | None = field(default=None)


@define(frozen=True, slots=True)
class TestResult:
    """
    One observed test operation, produced once by the test harness.

    Immutable once created. ``error`` may be absent even when the status is
    FAILED, since upstream callers are allowed to omit it.
    """

    __test__ = False

    test_name: str = field(validator=instance_of(str))
    operation_type: OperationType = field(converter=OperationType)
    status: ResultStatus = field(converter=ResultStatus)
    duration_ms: float = field(validator=ge(0))
    source_line: int = field(validator=_validate_source_line)
    source_file: str = field(validator=instance_of(str))
    error: TestError | None = field(default=None)
    payload: Any = field(default=None)

    @property
    def failed(self) -> bool:
        return self.status is ResultStatus.FAILED

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TestResult":
        """
        Builds a TestResult from a decoded JSON object.

        Accepts snake_case field names as well as the camelCase names emitted
        by JavaScript harnesses (``testName``, ``testLineNumber``, ...).
        """
        if not isinstance(data, Mapping):
            raise ResultFormatError(f"Expected a mapping, got {type(data).__name__}")

        def pick(*keys: str, default: Any = ...) -> Any:
            for key in keys:
                if key in data:
                    return data[key]
            if default is ...:
                raise ResultFormatError(f"Missing required field '{keys[0]}' in result {dict(data)!r}")
            return default

        raw_error = pick("error", default=None)
        if raw_error is None:
            error = None
        elif isinstance(raw_error, Mapping):
            error = TestError(message=raw_error.get("message"), stack=raw_error.get("stack"))
        else:
            error = TestError(message=str(raw_error))

        try:
            return cls(
                test_name=pick("test_name", "testName"),
                operation_type=pick("operation_type", "operationType"),
                status=pick("status"),
                duration_ms=pick("duration_ms", "durationMs", "duration"),
                source_line=pick("source_line", "sourceLine", "testLineNumber"),
                source_file=pick("source_file", "sourceFile", "filePath"),
                error=error,
                payload=pick("payload", "operationPayload", "operationResults", default=None),
            )
        except (TypeError, ValueError) as e:
            raise ResultFormatError(f"Invalid test result: {e}", details=e) from e


@define(frozen=True, slots=True)
class SuiteReport:
    """All results recorded for one test name, in execution order."""

    test_name: str
    entries: tuple[TestResult, ...]
    total_duration_ms: float
    overall_status: ResultStatus

    @classmethod
    def from_entries(cls, test_name: str, entries: list[TestResult]) -> "SuiteReport":
        failed = any(entry.failed for entry in entries)
        return cls(
            test_name=test_name,
            entries=tuple(entries),
            total_duration_ms=sum(entry.duration_ms for entry in entries),
            overall_status=ResultStatus.FAILED if failed else ResultStatus.PASSED,
        )


@define(frozen=True, slots=True)
class SuiteSummary:
    """Outcome of a single flush: the rendered report plus its totals."""

    report: str
    groups: tuple[SuiteReport, ...]
    failed: int
    passed: int
    total: int
    total_duration_ms: float
    suite_name: str | None = None

    @property
    def has_failures(self) -> bool:
        return self.failed > 0

    @property
    def failed_tests(self) -> list[str]:
        return [g.test_name for g in self.groups if g.overall_status is ResultStatus.FAILED]


# 🔼⚙️
