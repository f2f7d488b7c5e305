"""Style Linter Implementation.

Runs the tokenizer, declaration extractor and rule catalogue over
Objective-C sources and collects the results into a LintReport.

Pipeline (per file)
-------------------
    source -> tokenize -> suppressions -> extract_declarations
           -> enabled rules (declaration / line / file) -> sorted violations

Bounds
------
Directory traversal is iterative with a fixed depth and file count, files
over max_file_size are skipped, and reports stop collecting at
max_violations (marked truncated).
"""

from __future__ import annotations

import fnmatch
import time
import uuid
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from objcstyle.core.config import LintConfig
from objcstyle.core.exceptions import SourceReadError, TokenizeError, UnknownRuleError
from objcstyle.core.linting.declarations import Declaration, extract_declarations
from objcstyle.core.linting.report import LintReport, StyleViolation, ViolationSeverity
from objcstyle.core.linting.rules import (
    Finding,
    RuleContext,
    RuleTarget,
    SourceLine,
    StyleRule,
    default_rules,
)
from objcstyle.core.linting.suppressions import parse_suppressions
from objcstyle.core.linting.tokenizer import comment_line_ranges, tokenize
from objcstyle.core.logging import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 20  # Maximum directory depth
MAX_FILES_PER_SCAN = 5_000  # Maximum files per scan
TOKENIZE_RULE_ID = "OBJC000"

DEFAULT_EXCLUDES = [
    "**/.git/**",
    "**/.svn/**",
    "**/build/**",
    "**/DerivedData/**",
    "**/Pods/**",
    "**/Carthage/**",
    "**/*.xcodeproj/**",
    "**/*.xcworkspace/**",
    "**/*.xcassets/**",
]


class StyleLinter:
    """Objective-C style-convention linter."""

    def __init__(
        self,
        config: Optional[LintConfig] = None,
        rules: Optional[List[StyleRule]] = None,
    ) -> None:
        """Initialize linter.

        Args:
            config: Lint configuration. Uses defaults if None.
            rules: Custom rules. Uses the default catalogue if None.

        Raises:
            UnknownRuleError: If config disables or overrides a missing rule.
        """
        self.config = config or LintConfig()
        self._rules = rules if rules is not None else default_rules()
        self._extensions = {ext.lower() for ext in self.config.extensions}
        self._apply_config()

    def _apply_config(self) -> None:
        for rule_id in self.config.disabled_rules:
            if not self.disable_rule(rule_id):
                raise UnknownRuleError(rule_id)
        for rule_id, severity in self.config.severity_overrides.items():
            rule = self.get_rule(rule_id)
            if rule is None:
                raise UnknownRuleError(rule_id)
            rule.severity = ViolationSeverity(str(severity).lower())

    # ------------------------------------------------------------------
    # Single source
    # ------------------------------------------------------------------

    def _build_violation(
        self, rule: StyleRule, finding: Finding, file_path: str
    ) -> StyleViolation:
        return StyleViolation(
            violation_id=str(uuid.uuid4()),
            category=rule.category,
            severity=rule.severity,
            rule_id=rule.rule_id,
            name=finding.name,
            file_path=file_path,
            line_number=finding.line,
            column=finding.column,
            message=rule.format_message(finding),
            recommendation=rule.recommendation,
        )

    def _tokenize_failure(self, error: TokenizeError, file_path: str) -> List[StyleViolation]:
        rule = self.get_rule(TOKENIZE_RULE_ID)
        if rule is None or not rule.enabled:
            return []
        finding = Finding(line=max(error.line, 1), column=1, params={"detail": str(error)})
        return [self._build_violation(rule, finding, file_path)]

    def _run_rule(
        self,
        rule: StyleRule,
        context: RuleContext,
        declarations: List[Declaration],
    ) -> Iterable[Finding]:
        """Apply one rule to everything it targets."""
        if rule.target == RuleTarget.DECLARATION:
            for declaration in declarations:
                if rule.applies_to(declaration):
                    yield from rule.check(declaration, context)
        elif rule.target == RuleTarget.LINE:
            for number, text in enumerate(context.lines, start=1):
                yield from rule.check(SourceLine(number, text), context)
        else:
            yield from rule.check(context.source, context)

    def lint_source(self, source: str, file_path: str = "<source>") -> List[StyleViolation]:
        """Lint Objective-C source text.

        Args:
            source: File contents.
            file_path: Path reported in violations.

        Returns:
            Violations ordered by line, column and rule id.
        """
        try:
            tokens = tokenize(source)
        except TokenizeError as e:
            logger.debug("Cannot tokenize", path=file_path, error=str(e))
            return self._tokenize_failure(e, file_path)

        suppressions = parse_suppressions(tokens)
        declarations = extract_declarations(tokens)
        context = RuleContext.for_source(
            self.config, file_path, source, comment_line_ranges(tokens)
        )

        violations: List[StyleViolation] = []
        for rule in self._rules:
            if not rule.enabled:
                continue
            for finding in self._run_rule(rule, context, declarations):
                if suppressions.is_suppressed(rule.rule_id, finding.line):
                    continue
                violations.append(self._build_violation(rule, finding, file_path))

        violations.sort(key=lambda v: v.sort_key)
        logger.debug(
            "Linted source",
            path=file_path,
            declarations=len(declarations),
            violations=len(violations),
        )
        return violations

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def _check_file_eligible(self, file_path: Path) -> Optional[str]:
        """Check if file is eligible for linting and return content.

        Args:
            file_path: Path to check.

        Returns:
            File content if eligible, None if skipped for size.

        Raises:
            SourceReadError: If the file is missing or unreadable.
        """
        if not file_path.exists():
            raise SourceReadError(f"File not found: {file_path}", path=str(file_path))
        if not file_path.is_file():
            raise SourceReadError(f"Not a file: {file_path}", path=str(file_path))

        try:
            if file_path.stat().st_size > self.config.max_file_size:
                logger.info("Skipping large file", path=file_path)
                return None
            data = file_path.read_bytes()
        except OSError as e:
            raise SourceReadError(f"Cannot read {file_path}: {e}", path=str(file_path)) from e

        return data.decode("utf-8", errors="replace")

    def lint_file(self, file_path: Path) -> List[StyleViolation]:
        """Lint a single file.

        Explicitly named files are linted whatever their extension.

        Args:
            file_path: Path to file to lint.

        Returns:
            List of style violations (empty if the file was skipped).

        Raises:
            SourceReadError: If the file is missing or unreadable.
        """
        content = self._check_file_eligible(file_path)
        if content is None:
            return []
        return self.lint_source(content, str(file_path))

    # ------------------------------------------------------------------
    # Directories
    # ------------------------------------------------------------------

    def _is_source_file(self, path: Path) -> bool:
        return path.suffix.lower() in self._extensions

    def _collect_files_iteratively(
        self,
        directory: Path,
        exclude_patterns: List[str],
        recursive: bool,
    ) -> List[Path]:
        """Collect files to lint using iterative traversal.

        Args:
            directory: Root directory.
            exclude_patterns: Patterns to exclude.
            recursive: Whether to recurse into subdirectories.

        Returns:
            List of file paths to lint, in sorted order per directory.
        """
        files_to_lint: List[Path] = []
        dirs_to_process = [directory]
        depth = 0

        while dirs_to_process and depth < MAX_DEPTH:
            current_dirs = dirs_to_process[:]
            dirs_to_process = []
            depth += 1

            for current_dir in current_dirs:
                try:
                    items = sorted(current_dir.iterdir())
                except PermissionError:
                    logger.warning("Cannot list directory", path=current_dir)
                    continue

                for item in items:
                    if self._should_exclude(item, exclude_patterns, directory):
                        continue

                    if item.is_file() and self._is_source_file(item):
                        files_to_lint.append(item)
                        if len(files_to_lint) >= MAX_FILES_PER_SCAN:
                            logger.warning("File limit reached", limit=MAX_FILES_PER_SCAN)
                            return files_to_lint
                    elif item.is_dir() and recursive:
                        dirs_to_process.append(item)

        return files_to_lint

    def _should_exclude(self, path: Path, patterns: List[str], root: Path) -> bool:
        """Check if path should be excluded.

        A pattern matches the item's own name with any leading "**/" and
        trailing "/**" removed, or the path relative to the scanned root.
        Directories above the root never cause an exclusion.

        Args:
            path: Path to check.
            patterns: Exclusion patterns.
            root: Directory the scan started from.

        Returns:
            True if path should be excluded.
        """
        path_str = path.relative_to(root).as_posix()
        for pattern in patterns:
            bare = pattern.replace("**/", "").replace("/**", "")
            if bare and fnmatch.fnmatch(path.name, bare):
                return True
            if fnmatch.fnmatch(path_str, pattern) or fnmatch.fnmatch(path_str, f"*/{pattern}"):
                return True
        return False

    def _lint_into_report(self, file_path: Path, report: LintReport) -> None:
        try:
            content = self._check_file_eligible(file_path)
        except SourceReadError as e:
            logger.warning("Skipping unreadable file", path=file_path, error=str(e))
            report.files_skipped += 1
            return
        if content is None:
            report.files_skipped += 1
            return

        report.files_scanned += 1
        for violation in self.lint_source(content, str(file_path)):
            if not report.add_violation(violation):
                break

    def lint_paths(
        self,
        paths: Sequence[Path],
        recursive: bool = True,
        exclude_patterns: Optional[List[str]] = None,
    ) -> LintReport:
        """Lint files and directories into one report.

        Args:
            paths: Files and/or directories.
            recursive: Whether to lint subdirectories.
            exclude_patterns: Glob patterns to exclude, in addition to
                the configured and default excludes.

        Returns:
            LintReport with all violations.

        Raises:
            SourceReadError: If a path does not exist.
        """
        start = time.perf_counter()

        for path in paths:
            if not path.exists():
                raise SourceReadError(f"Path does not exist: {path}", path=str(path))

        report = LintReport(
            report_id=str(uuid.uuid4()),
            scan_path=", ".join(str(p) for p in paths),
            max_violations=self.config.max_violations,
        )
        all_excludes = (exclude_patterns or []) + self.config.exclude + DEFAULT_EXCLUDES

        files_to_lint: List[Path] = []
        for path in paths:
            if path.is_dir():
                files_to_lint.extend(
                    self._collect_files_iteratively(path, all_excludes, recursive)
                )
            else:
                files_to_lint.append(path)

        for file_path in files_to_lint:
            if report.truncated:
                break
            self._lint_into_report(file_path, report)

        elapsed_ms = (time.perf_counter() - start) * 1000
        report.complete(elapsed_ms)
        logger.info(
            "Lint complete",
            files=report.files_scanned,
            skipped=report.files_skipped,
            violations=len(report.violations),
        )
        return report

    def lint_directory(
        self,
        directory: Path,
        recursive: bool = True,
        exclude_patterns: Optional[List[str]] = None,
    ) -> LintReport:
        """Lint a directory for style violations.

        Args:
            directory: Directory to lint.
            recursive: Whether to lint subdirectories.
            exclude_patterns: Glob patterns to exclude.

        Returns:
            LintReport with all violations.

        Raises:
            SourceReadError: If directory is missing or not a directory.
        """
        if not directory.is_dir():
            raise SourceReadError(f"Not a directory: {directory}", path=str(directory))
        return self.lint_paths([directory], recursive, exclude_patterns)

    # ------------------------------------------------------------------
    # Rule management
    # ------------------------------------------------------------------

    def get_rules(self) -> List[StyleRule]:
        """Get current rules.

        Returns:
            List of style rules.
        """
        return list(self._rules)

    def get_rule(self, rule_id: str) -> Optional[StyleRule]:
        """Get a rule by ID, or None."""
        wanted = rule_id.strip().upper()
        for rule in self._rules:
            if rule.rule_id == wanted:
                return rule
        return None

    def enable_rule(self, rule_id: str) -> bool:
        """Enable a rule by ID.

        Args:
            rule_id: Rule identifier.

        Returns:
            True if rule was found and enabled.
        """
        rule = self.get_rule(rule_id)
        if rule is None:
            return False
        rule.enabled = True
        return True

    def disable_rule(self, rule_id: str) -> bool:
        """Disable a rule by ID.

        Args:
            rule_id: Rule identifier.

        Returns:
            True if rule was found and disabled.
        """
        rule = self.get_rule(rule_id)
        if rule is None:
            return False
        rule.enabled = False
        return True


def create_linter(
    config: Optional[LintConfig] = None,
    rules: Optional[List[StyleRule]] = None,
) -> StyleLinter:
    """Factory function to create a style linter.

    Args:
        config: Optional configuration.
        rules: Optional custom rules.

    Returns:
        Configured StyleLinter instance.
    """
    return StyleLinter(config=config, rules=rules)
