"""Tests for compact and JSON report renderings."""

import json
from pathlib import Path

from objcstyle.core.linting.formatters import (
    OUTPUT_FORMATS,
    format_compact,
    format_json,
    format_sarif,
    format_violation,
    save_json,
)
from objcstyle.core.linting.linter import StyleLinter
from objcstyle.core.linting.report import LintReport


def _report(source: str, max_violations: int = 500) -> LintReport:
    report = LintReport(report_id="r", scan_path="legacy.m", max_violations=max_violations)
    for violation in StyleLinter().lint_source(source, "legacy.m"):
        report.add_violation(violation)
    report.complete(1.0)
    return report


class TestCompact:
    """Tests for the one-line-per-violation format."""

    def test_format_violation(self, dirty_source: str) -> None:
        """Test the compiler-diagnostic form."""
        violation = StyleLinter().lint_source(dirty_source, "legacy.m")[0]
        assert format_violation(violation) == (
            "legacy.m:1:12: error: Class 'photo_viewer' should be UpperCamelCase "
            "without underscores [OBJC101]"
        )

    def test_one_line_per_violation(self, dirty_source: str) -> None:
        """Test line count matches violation count."""
        lines = format_compact(_report(dirty_source)).splitlines()
        assert len(lines) == 11
        assert lines[-1].startswith("legacy.m:7:15: warning: Trailing whitespace")

    def test_truncated_marker(self, dirty_source: str) -> None:
        """Test truncated reports say so."""
        lines = format_compact(_report(dirty_source, max_violations=3)).splitlines()
        assert len(lines) == 4
        assert lines[-1] == "... output truncated at 3 violations"

    def test_empty_report(self, clean_header: str) -> None:
        """Test a clean report renders as nothing."""
        assert format_compact(_report(clean_header)) == ""


class TestJson:
    """Tests for JSON output."""

    def test_json_round_trips_summary(self, dirty_source: str) -> None:
        """Test the JSON document carries the summary."""
        data = json.loads(format_json(_report(dirty_source)))
        assert data["summary"]["total_violations"] == 11
        assert data["summary"]["errors"] == 3
        assert data["summary"]["warnings"] == 7
        assert data["summary"]["info"] == 1
        assert data["summary"]["by_rule"]["OBJC101"] == 1

    def test_save_json_creates_parents(self, temp_dir: Path, dirty_source: str) -> None:
        """Test saving to a nested path."""
        output = temp_dir / "out" / "report.json"
        save_json(_report(dirty_source), output)
        assert json.loads(output.read_text(encoding="utf-8"))["report_id"] == "r"

    def test_format_sarif_is_json(self, dirty_source: str) -> None:
        """Test the SARIF rendering is a JSON string."""
        data = json.loads(format_sarif(_report(dirty_source)))
        assert data["version"] == "2.1.0"

    def test_output_formats(self) -> None:
        """Test the advertised format names."""
        assert OUTPUT_FORMATS == ("table", "compact", "json", "sarif")
