# src/suitelog/precommit.py
"""
Pre-commit gating helpers, used at the CLI boundary.
"""
from collections.abc import Iterable, Mapping

import structlog

from suitelog.config.models import LoggingConfig
from suitelog.models import SuiteSummary
from suitelog.router import LogRouter

log = structlog.get_logger("precommit")

# pre-commit exports PRE_COMMIT=1, husky exports HUSKY_GIT_PARAMS.
DEFAULT_HOOK_MARKERS = ("PRE_COMMIT", "HUSKY_GIT_PARAMS")
ABORT_MESSAGE = "Tests failed. Commit aborted."


def hook_marker_present(environ: Mapping[str, str], markers: Iterable[str] = DEFAULT_HOOK_MARKERS) -> bool:
    """True when any of the commit-hook environment markers is set."""
    return any(marker in environ for marker in markers)


def gate_exit_code(summary: SuiteSummary, config: LoggingConfig) -> int:
    """Exit status the host process should use after this suite."""
    if config.hook_active and config.mode.uses_precommit and summary.has_failures:
        return 1
    return 0


def enforce_gate(summary: SuiteSummary, config: LoggingConfig, router: LogRouter | None = None) -> None:
    """
    Raises SystemExit(1) when a commit hook is running and tests failed.

    Call only after the suite report has been flushed.
    """
    code = gate_exit_code(summary, config)
    if code == 0:
        return
    log.warning("Aborting commit", failed=summary.failed, total=summary.total)
    if router is not None:
        router.log(ABORT_MESSAGE)
    raise SystemExit(code)


# 🔼⚙️
