"""SARIF 2.1.0 Output Format for Code Scanning.

Converts a LintReport to SARIF 2.1.0 so lint results can be uploaded to
code-scanning services (e.g. GitHub Code Scanning).

Implementation:
- SARIF 2.1.0 schema (https://json.schemastore.org/sarif-2.1.0.json)
- Tool section with deduplicated rules
- Results with physicalLocation and line/column region
- Invocation section with execution metadata
- Severity mapping: error→"error", warning→"warning", info→"note"
- Bounded results (MAX_SARIF_RESULTS) and rules (MAX_SARIF_RULES)
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from objcstyle import __version__
from objcstyle.core.linting.report import LintReport, StyleViolation, ViolationSeverity
from objcstyle.core.linting.rules import StyleRule
from objcstyle.core.logging import get_logger

logger = get_logger(__name__)

MAX_SARIF_RESULTS = 1000
MAX_SARIF_RULES = 1000  # Maximum unique rules to include
SARIF_VERSION = "2.1.0"
SARIF_SCHEMA_URI = "https://json.schemastore.org/sarif-2.1.0.json"
TOOL_NAME = "objcstyle"


def convert_to_sarif(
    report: LintReport,
    tool_name: str = TOOL_NAME,
    tool_version: str = __version__,
    rules: Optional[List[StyleRule]] = None,
) -> Dict[str, Any]:
    """Convert LintReport to SARIF 2.1.0 format.

    Args:
        report: Lint report.
        tool_name: Name of the linting tool.
        tool_version: Version of the linting tool.
        rules: Rule catalogue used for rule titles; rule ids are used
            as names when omitted.

    Returns:
        SARIF-formatted dictionary.
    """
    assert tool_name, "Tool name cannot be empty"
    assert tool_version, "Tool version cannot be empty"

    logger.debug("Converting to SARIF", violations=len(report.violations))

    return {
        "$schema": SARIF_SCHEMA_URI,
        "version": SARIF_VERSION,
        "runs": [
            {
                "tool": _build_tool_section(tool_name, tool_version, report, rules),
                "results": _build_results_section(report),
                "invocations": [_build_invocation_section(report)],
            }
        ],
    }


def _build_tool_section(
    tool_name: str,
    tool_version: str,
    report: LintReport,
    rules: Optional[List[StyleRule]],
) -> Dict[str, Any]:
    return {
        "driver": {
            "name": tool_name,
            "version": tool_version,
            "rules": _extract_rules(report.violations, rules),
        }
    }


def _extract_rules(
    violations: List[StyleViolation], rules: Optional[List[StyleRule]] = None
) -> List[Dict[str, Any]]:
    """Extract unique rules from violations, in order of first occurrence.

    Args:
        violations: Report violations.
        rules: Optional rule catalogue for titles.

    Returns:
        List of SARIF rule objects.
    """
    titles = {rule.rule_id: rule.title for rule in rules or []}
    seen_rules: Dict[str, StyleViolation] = {}

    for violation in violations[:MAX_SARIF_RESULTS]:
        if violation.rule_id not in seen_rules:
            seen_rules[violation.rule_id] = violation

    sarif_rules: List[Dict[str, Any]] = []
    for rule_id, violation in list(seen_rules.items())[:MAX_SARIF_RULES]:
        title = titles.get(rule_id, rule_id)
        sarif_rules.append(
            {
                "id": rule_id,
                "name": title,
                "shortDescription": {"text": title},
                "help": {"text": violation.recommendation},
                "defaultConfiguration": {
                    "level": _severity_to_sarif_level(violation.severity)
                },
                "properties": {
                    "category": violation.category.value,
                    "tags": ["style", violation.category.value],
                },
            }
        )
    return sarif_rules


def _build_results_section(report: LintReport) -> List[Dict[str, Any]]:
    return [
        _convert_violation_to_sarif_result(violation)
        for violation in report.violations[:MAX_SARIF_RESULTS]
    ]


def _fingerprint(violation: StyleViolation) -> str:
    key = f"{violation.file_path}:{violation.line_number}:{violation.rule_id}"
    return hashlib.sha256(key.encode("utf-8")).hexdigest()[:32]


def _convert_violation_to_sarif_result(violation: StyleViolation) -> Dict[str, Any]:
    """Convert StyleViolation to SARIF result.

    Args:
        violation: Style violation.

    Returns:
        SARIF result object.
    """
    return {
        "ruleId": violation.rule_id,
        "level": _severity_to_sarif_level(violation.severity),
        "message": {"text": violation.message},
        "locations": [
            {
                "physicalLocation": {
                    "artifactLocation": {
                        "uri": Path(violation.file_path).as_posix(),
                        "uriBaseId": "%SRCROOT%",
                    },
                    "region": {
                        "startLine": violation.line_number,
                        "startColumn": violation.column,
                    },
                }
            }
        ],
        "partialFingerprints": {"primaryLocationLineHash": _fingerprint(violation)},
        "properties": {
            "category": violation.category.value,
            "violation_id": violation.violation_id,
        },
    }


def _build_invocation_section(report: LintReport) -> Dict[str, Any]:
    return {
        "executionSuccessful": True,
        "startTimeUtc": report.started_at,
        "endTimeUtc": report.completed_at or report.started_at,
        "properties": {
            "scan_path": report.scan_path,
            "files_scanned": report.files_scanned,
            "files_skipped": report.files_skipped,
            "scan_duration_ms": report.scan_duration_ms,
            "truncated": report.truncated,
        },
    }


def _severity_to_sarif_level(severity: ViolationSeverity) -> str:
    """Map ViolationSeverity to SARIF level (error, warning, note)."""
    if severity == ViolationSeverity.ERROR:
        return "error"
    elif severity == ViolationSeverity.WARNING:
        return "warning"
    else:
        return "note"


def save_sarif(
    report: LintReport,
    output_path: Path,
    tool_name: str = TOOL_NAME,
    tool_version: str = __version__,
    rules: Optional[List[StyleRule]] = None,
) -> None:
    """Convert report to SARIF and save to file.

    Args:
        report: Lint report.
        output_path: Path to save SARIF file.
        tool_name: Name of the linting tool.
        tool_version: Version of the linting tool.
        rules: Optional rule catalogue for titles.
    """
    sarif = convert_to_sarif(report, tool_name, tool_version, rules)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(sarif, f, indent=2)

    logger.info("SARIF report saved", path=output_path)
