# src/suitelog/ingest.py
"""
Reads TestResult records from the JSON files a test harness writes.
"""
import json
from pathlib import Path

import structlog

from suitelog.exceptions import ResultFormatError
from suitelog.models import TestResult

log = structlog.get_logger("ingest")


def parse_results(text: str) -> list[TestResult]:
    """
    Decodes results from a JSON array, a ``{"results": [...]}`` object, or
    JSON lines (one object per line).
    """
    stripped = text.strip()
    if not stripped:
        return []

    try:
        document = json.loads(stripped)
    except json.JSONDecodeError:
        records = []
        for number, line in enumerate(stripped.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise ResultFormatError(f"Invalid JSON on line {number}: {e.msg}", details=e) from e
    else:
        if isinstance(document, dict) and "results" in document:
            records = document["results"]
        elif isinstance(document, dict):
            records = [document]
        else:
            records = document

    if not isinstance(records, list):
        raise ResultFormatError(f"Expected a list of results, got {type(records).__name__}")
    return [TestResult.from_mapping(record) for record in records]


def load_results(path: Path) -> list[TestResult]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ResultFormatError(f"Could not read results file '{path}': {e}", details=e) from e
    results = parse_results(text)
    log.debug("Loaded test results", path=str(path), count=len(results))
    return results


# 🔼⚙️
