"""Plain-text and JSON renderings of a LintReport.

    format_compact(report)   path:line:col: severity: message [RULE]
    format_json(report)      report.to_dict() as indented JSON
    convert_to_sarif(...)    see sarif_formatter
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

from objcstyle.core.linting.report import LintReport, StyleViolation
from objcstyle.core.linting.rules import StyleRule
from objcstyle.core.linting.sarif_formatter import convert_to_sarif, save_sarif

OUTPUT_FORMATS = ("table", "compact", "json", "sarif")


def format_violation(violation: StyleViolation) -> str:
    """Render one violation in compiler-diagnostic form."""
    return (
        f"{violation.file_path}:{violation.line_number}:{violation.column}: "
        f"{violation.severity.value}: {violation.message} [{violation.rule_id}]"
    )


def format_compact(report: LintReport) -> str:
    """Render a report with one line per violation.

    Editors and CI log parsers understand this form. An empty report
    renders as an empty string.
    """
    lines = [format_violation(v) for v in report.violations]
    if report.truncated:
        lines.append(f"... output truncated at {len(report.violations)} violations")
    return "\n".join(lines)


def format_json(report: LintReport, indent: int = 2) -> str:
    """Render a report as JSON."""
    return json.dumps(report.to_dict(), indent=indent)


def format_sarif(report: LintReport, rules: Optional[List[StyleRule]] = None) -> str:
    """Render a report as a SARIF 2.1.0 JSON document."""
    return json.dumps(convert_to_sarif(report, rules=rules), indent=2)


def save_json(report: LintReport, output_path: Path) -> None:
    """Write the JSON rendering of a report to a file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(format_json(report), encoding="utf-8")


__all__ = [
    "OUTPUT_FORMATS",
    "format_violation",
    "format_compact",
    "format_json",
    "format_sarif",
    "save_json",
    "convert_to_sarif",
    "save_sarif",
]
