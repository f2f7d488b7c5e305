"""Lint Violations and Reports.

Defines the diagnostic data model shared by the rule engine, the
formatters and the CLI:

- ViolationSeverity / RuleCategory: classification enums
- StyleViolation: one immutable diagnostic
- LintReport: bounded, sortable aggregate with CI exit code

Exit Codes
----------
    0  clean, or informational findings only
    1  warnings
    2  errors
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from objcstyle.core.config import MAX_VIOLATIONS


class ViolationSeverity(Enum):
    """Style violation severity levels."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class RuleCategory(Enum):
    """Categories of style rules."""

    CLASS = "class"
    PROTOCOL = "protocol"
    CATEGORY = "category"
    METHOD = "method"
    PROPERTY = "property"
    VARIABLE = "variable"
    CONSTANT = "constant"
    ENUMERATION = "enumeration"
    MACRO = "macro"
    WHITESPACE = "whitespace"
    LAYOUT = "layout"
    SYNTAX = "syntax"


@dataclass(frozen=True)
class StyleViolation:
    """Immutable style violation."""

    violation_id: str
    category: RuleCategory
    severity: ViolationSeverity
    rule_id: str
    name: str
    file_path: str
    line_number: int
    column: int
    message: str
    recommendation: str

    @property
    def sort_key(self) -> tuple:
        """Ordering key: file, line, column, rule id."""
        return (self.file_path, self.line_number, self.column, self.rule_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "violation_id": self.violation_id,
            "category": self.category.value,
            "severity": self.severity.value,
            "rule_id": self.rule_id,
            "name": self.name,
            "file_path": self.file_path,
            "line_number": self.line_number,
            "column": self.column,
            "message": self.message,
            "recommendation": self.recommendation,
        }


@dataclass
class LintReport:
    """Lint scan report."""

    report_id: str
    scan_path: str
    violations: List[StyleViolation] = field(default_factory=list)
    files_scanned: int = 0
    files_skipped: int = 0
    scan_duration_ms: float = 0.0
    started_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    completed_at: Optional[str] = None
    truncated: bool = False
    max_violations: int = MAX_VIOLATIONS

    @property
    def error_count(self) -> int:
        """Count of error severity violations."""
        return sum(1 for v in self.violations if v.severity == ViolationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        """Count of warning severity violations."""
        return sum(
            1 for v in self.violations if v.severity == ViolationSeverity.WARNING
        )

    @property
    def info_count(self) -> int:
        """Count of info severity violations."""
        return sum(1 for v in self.violations if v.severity == ViolationSeverity.INFO)

    @property
    def exit_code(self) -> int:
        """Get CI exit code based on violations.

        Returns:
            0 = clean or info only, 1 = warnings, 2 = errors
        """
        if self.error_count > 0:
            return 2
        if self.warning_count > 0:
            return 1
        return 0

    def counts_by_rule(self) -> Dict[str, int]:
        """Number of violations per rule id, ordered by rule id."""
        counts = Counter(v.rule_id for v in self.violations)
        return dict(sorted(counts.items()))

    def add_violation(self, violation: StyleViolation) -> bool:
        """Add violation to report.

        Args:
            violation: Violation to add.

        Returns:
            True if added, False if at capacity.
        """
        if len(self.violations) >= self.max_violations:
            self.truncated = True
            return False
        self.violations.append(violation)
        return True

    def sort(self) -> None:
        """Order violations by file, line, column and rule id."""
        self.violations.sort(key=lambda v: v.sort_key)

    def complete(self, duration_ms: float) -> None:
        """Mark report as completed.

        Args:
            duration_ms: Scan duration in milliseconds.
        """
        self.sort()
        self.completed_at = datetime.now(timezone.utc).isoformat()
        self.scan_duration_ms = duration_ms

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "report_id": self.report_id,
            "scan_path": self.scan_path,
            "summary": {
                "total_violations": len(self.violations),
                "errors": self.error_count,
                "warnings": self.warning_count,
                "info": self.info_count,
                "exit_code": self.exit_code,
                "by_rule": self.counts_by_rule(),
            },
            "files_scanned": self.files_scanned,
            "files_skipped": self.files_skipped,
            "scan_duration_ms": self.scan_duration_ms,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
            "truncated": self.truncated,
            "violations": [v.to_dict() for v in self.violations],
        }
