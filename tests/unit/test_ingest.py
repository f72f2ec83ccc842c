#
# tests/unit/test_ingest.py
#
"""
Tests for reading result files.
"""

import json
from pathlib import Path

import pytest

from suitelog.exceptions import ResultFormatError
from suitelog.ingest import load_results, parse_results

RECORD = {
    "testName": "adds numbers",
    "operationType": "get",
    "status": "passed",
    "duration": 5,
    "testLineNumber": 3,
    "filePath": "tests/test_math.py",
}


class TestParseResults:
    def test_json_array(self) -> None:
        results = parse_results(json.dumps([RECORD, {**RECORD, "status": "failed"}]))

        assert [r.status.value for r in results] == ["passed", "failed"]

    def test_results_object(self) -> None:
        assert len(parse_results(json.dumps({"results": [RECORD]}))) == 1

    def test_json_lines(self) -> None:
        text = "\n".join([json.dumps(RECORD), "", json.dumps({**RECORD, "testName": "b"})])

        assert [r.test_name for r in parse_results(text)] == ["adds numbers", "b"]

    def test_empty_input(self) -> None:
        assert parse_results("  \n") == []

    def test_bad_json_line(self) -> None:
        with pytest.raises(ResultFormatError, match="line 2"):
            parse_results(json.dumps(RECORD) + "\n{broken")

    def test_scalar_document(self) -> None:
        with pytest.raises(ResultFormatError):
            parse_results("42")


class TestLoadResults:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "results.json"
        path.write_text(json.dumps([RECORD]), encoding="utf-8")

        assert load_results(path)[0].test_name == "adds numbers"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ResultFormatError):
            load_results(tmp_path / "missing.json")
