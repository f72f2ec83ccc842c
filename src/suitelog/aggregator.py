# src/suitelog/aggregator.py
"""
Accumulates test results for a suite and renders the grouped report.
"""
import json
from pathlib import Path
from typing import Any

import structlog

from suitelog.diagnostics import extract_code_context, parse_stack_location, relevant_frames
from suitelog.models import ResultStatus, SuiteReport, SuiteSummary, TestResult
from suitelog.router import LogRouter
from suitelog.telemetry import StructLogger

log: StructLogger = structlog.get_logger("aggregator")

INDENT = "  "


def format_duration(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value)}ms"
    return f"{value:.3f}".rstrip("0").rstrip(".") + "ms"


def format_payload(payload: Any) -> str:
    try:
        text = json.dumps(payload, indent=2, default=repr, ensure_ascii=False)
    except (TypeError, ValueError):
        text = repr(payload)
    return "\n".join(INDENT + line for line in text.splitlines())


def group_results(results: list[TestResult]) -> list[SuiteReport]:
    """Groups by test name, keeping first-seen group order and execution order within a group."""
    grouped: dict[str, list[TestResult]] = {}
    for result in results:
        grouped.setdefault(result.test_name, []).append(result)
    return [SuiteReport.from_entries(name, entries) for name, entries in grouped.items()]


class ResultAggregator:
    """
    Collects TestResult records and renders them on ``flush()``.

    Flushing is destructive: the accumulated results are cleared, so one
    aggregator can serve several suites in sequence without results leaking
    from one report into the next.
    """

    def __init__(
        self,
        router: LogRouter | None = None,
        suite_name: str | None = None,
        context_lines: int = 2,
        base_dir: Path | None = None,
        trim_stacks: bool = False,
    ):
        self.router = router
        self.suite_name = suite_name
        self.context_lines = context_lines
        self.base_dir = base_dir
        self.trim_stacks = trim_stacks
        self._results: list[TestResult] = []
        self._log = log.bind(suite=suite_name)

    @property
    def pending(self) -> int:
        return len(self._results)

    def record(self, result: TestResult) -> None:
        self._results.append(result)

    def _render_entry(self, result: TestResult) -> list[str]:
        lines = [
            "",
            f"{INDENT}Operation Type: {result.operation_type.value}",
            f"{INDENT}Status: {result.status.value}",
            f"{INDENT}Duration: {format_duration(result.duration_ms)}",
            f"{INDENT}File: {result.source_file}",
            f"{INDENT}Line Number: {result.source_line}",
        ]
        if result.failed:
            error = result.error
            stack = error.stack if error else None
            if error and error.message:
                lines.append(f"{INDENT}Error: {error.message}")
            if stack:
                frames = relevant_frames(stack, result.source_file) if self.trim_stacks else []
                lines.append("\n".join(frames) if frames else stack)

            location = parse_stack_location(stack, result.source_file)
            column = location.column if location and location.line == result.source_line else None
            context = extract_code_context(
                result.source_file,
                result.source_line,
                context_lines=self.context_lines,
                column=column,
                base_dir=self.base_dir,
            )
            lines.append(f"{INDENT}Code Context:")
            lines.append(context)

        lines.append(f"{INDENT}Operation Results:")
        lines.append(format_payload(result.payload))
        return lines

    def _render_group(self, group: SuiteReport) -> str:
        lines = ["", f"Test: {group.test_name}"]
        for entry in group.entries:
            lines.extend(self._render_entry(entry))
        lines.append("")
        lines.append(f"Overall Status: {group.overall_status.value}")
        lines.append(f"Total Duration: {format_duration(group.total_duration_ms)}")
        return "\n".join(lines)

    def _render_failure_summary(self, summary: SuiteSummary) -> str:
        lines = [
            f"Test summary for {summary.suite_name or 'unnamed suite'}:",
            f"Tests: {summary.failed} failed, {summary.passed} passed, {summary.total} total",
        ]
        lines.extend(f"{INDENT}× {name}" for name in summary.failed_tests)
        return "\n".join(lines)

    def flush(self) -> SuiteSummary:
        """
        Renders every accumulated result, logs the report and clears the buffer.

        Returns the SuiteSummary; an empty buffer yields a report with zero
        counts.
        """
        results, self._results = self._results, []
        groups = group_results(results)

        failed = sum(1 for g in groups if g.overall_status is ResultStatus.FAILED)
        total = len(groups)
        total_duration = sum(g.total_duration_ms for g in groups)

        blocks = [self._render_group(group) for group in groups]
        blocks.append(
            f"\nAll tests completed. {failed} failed, {total - failed} passed, {total} total."
            f"\nTime: {format_duration(total_duration)}"
        )
        report = "\n".join(blocks)

        summary = SuiteSummary(
            report=report,
            groups=tuple(groups),
            failed=failed,
            passed=total - failed,
            total=total,
            total_duration_ms=total_duration,
            suite_name=self.suite_name,
        )

        self._log.info(
            "Suite flushed",
            results=len(results),
            tests=total,
            failed=failed,
            duration_ms=total_duration,
        )

        if self.router is not None:
            self.router.log(report)
            self.router.log_failure_summary(self._render_failure_summary(summary))

        return summary


# 🔼⚙️
