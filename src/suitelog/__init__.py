#
# src/suitelog/__init__.py
#
"""
Suitelog: test-result diagnostics and logging.

Collects per-operation test outcomes, renders grouped suite reports with
source-code context around failures, and routes them to the configured
log sinks.
"""
from suitelog.aggregator import ResultAggregator
from suitelog.config import LoggingConfig, LoggingMode, load_config
from suitelog.diagnostics import extract_code_context, parse_stack_location
from suitelog.lifecycle import LifecycleManager, RouterHandle
from suitelog.models import (
    OperationType,
    ResultStatus,
    SuiteReport,
    SuiteSummary,
    TestError,
    TestResult,
)
from suitelog.router import LogRouter

__all__ = [
    "LifecycleManager",
    "LogRouter",
    "LoggingConfig",
    "LoggingMode",
    "OperationType",
    "ResultAggregator",
    "ResultStatus",
    "RouterHandle",
    "SuiteReport",
    "SuiteSummary",
    "TestError",
    "TestResult",
    "extract_code_context",
    "load_config",
    "parse_stack_location",
]

# 🔼⚙️
