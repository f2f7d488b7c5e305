"""Tests for the style linter.

Covers single-source linting, file and directory scans, configuration
handling and rule management.
"""

from pathlib import Path

import pytest

from objcstyle.core.config import LintConfig
from objcstyle.core.exceptions import SourceReadError, UnknownRuleError
from objcstyle.core.linting.linter import StyleLinter, create_linter
from objcstyle.core.linting.report import ViolationSeverity


class TestLintSource:
    """Tests for StyleLinter.lint_source."""

    def test_clean_sources(self, clean_header: str, clean_implementation: str) -> None:
        """Test conforming code produces no violations."""
        linter = StyleLinter()
        assert linter.lint_source(clean_header, "XYZPhotoViewController.h") == []
        assert linter.lint_source(clean_implementation, "XYZPhotoViewController.m") == []

    def test_legacy_typedef_enum_is_clean(self) -> None:
        """Test a tagged typedef enum is checked under its typedef name."""
        source = "typedef enum _XYZStyle {\n\tXYZStyleA,\n\tXYZStyleB\n} XYZStyle;\n"
        assert StyleLinter().lint_source(source, "XYZStyle.h") == []

    def test_dirty_source(self, dirty_source: str) -> None:
        """Test every expected violation is reported in order."""
        violations = StyleLinter().lint_source(dirty_source, "legacy.m")

        assert [(v.line_number, v.rule_id) for v in violations] == [
            (1, "OBJC101"),
            (1, "OBJC102"),
            (2, "FMT205"),
            (2, "OBJC109"),
            (3, "OBJC107"),
            (4, "FMT204"),
            (4, "OBJC106"),
            (4, "OBJC108"),
            (6, "OBJC114"),
            (7, "FMT201"),
            (7, "FMT202"),
        ]
        assert all(v.file_path == "legacy.m" for v in violations)
        assert violations[0].column == 12
        assert violations[0].name == "photo_viewer"

    def test_violation_ids_are_unique(self, dirty_source: str) -> None:
        """Test each violation gets its own id."""
        violations = StyleLinter().lint_source(dirty_source)
        assert len({v.violation_id for v in violations}) == len(violations)

    def test_unterminated_comment_reports_tokenize_error(self) -> None:
        """Test a tokenizer failure becomes a single OBJC000 violation."""
        violations = StyleLinter().lint_source("int a;\n/* open\n@interface bad_name\n")
        assert len(violations) == 1
        assert violations[0].rule_id == "OBJC000"
        assert violations[0].severity == ViolationSeverity.ERROR
        assert violations[0].line_number == 2
        assert "could not be tokenized" in violations[0].message

    def test_tokenize_rule_can_be_disabled(self) -> None:
        """Test disabling OBJC000 silences tokenizer failures."""
        linter = StyleLinter(LintConfig(disabled_rules=["OBJC000"]))
        assert linter.lint_source("/* open") == []

    def test_rules_are_independent(self, dirty_source: str) -> None:
        """Test disabling a rule only removes that rule's findings."""
        baseline = StyleLinter().lint_source(dirty_source)
        linter = StyleLinter(LintConfig(disabled_rules=["OBJC101"]))
        without = linter.lint_source(dirty_source)
        assert [v.rule_id for v in without] == [
            v.rule_id for v in baseline if v.rule_id != "OBJC101"
        ]


class TestConfiguration:
    """Tests for configuration applied by the linter."""

    def test_severity_override(self, dirty_source: str) -> None:
        """Test severity overrides change reported severity."""
        config = LintConfig(severity_overrides={"OBJC114": "error"})
        violations = StyleLinter(config).lint_source(dirty_source)
        macro = [v for v in violations if v.rule_id == "OBJC114"]
        assert macro[0].severity == ViolationSeverity.ERROR

    def test_unknown_disabled_rule(self) -> None:
        """Test configuration naming a missing rule fails."""
        with pytest.raises(UnknownRuleError) as exc_info:
            StyleLinter(LintConfig(disabled_rules=["OBJC999"]))
        assert exc_info.value.rule_id == "OBJC999"

    def test_unknown_severity_override(self) -> None:
        """Test overrides naming a missing rule fail."""
        with pytest.raises(UnknownRuleError):
            StyleLinter(LintConfig(severity_overrides={"NOPE1": "info"}))

    def test_overrides_do_not_leak_between_linters(self) -> None:
        """Test each linter owns its rule copies."""
        StyleLinter(LintConfig(disabled_rules=["FMT202"]))
        assert StyleLinter().get_rule("FMT202").enabled is True


class TestLintFile:
    """Tests for single-file linting."""

    def test_lint_file(self, temp_dir: Path, dirty_source: str) -> None:
        """Test violations carry the file path."""
        path = temp_dir / "legacy.m"
        path.write_text(dirty_source, encoding="utf-8")
        violations = StyleLinter().lint_file(path)
        assert len(violations) == 11
        assert violations[0].file_path == str(path)

    def test_missing_file(self, temp_dir: Path) -> None:
        """Test a missing file raises SourceReadError."""
        with pytest.raises(SourceReadError) as exc_info:
            StyleLinter().lint_file(temp_dir / "missing.m")
        assert exc_info.value.path.endswith("missing.m")

    def test_directory_is_not_a_file(self, temp_dir: Path) -> None:
        """Test directories are rejected."""
        with pytest.raises(SourceReadError):
            StyleLinter().lint_file(temp_dir)

    def test_large_file_skipped(self, temp_dir: Path, dirty_source: str) -> None:
        """Test files over max_file_size are not linted."""
        path = temp_dir / "big.m"
        path.write_text(dirty_source, encoding="utf-8")
        assert StyleLinter(LintConfig(max_file_size=10)).lint_file(path) == []

    def test_invalid_utf8_is_replaced(self, temp_dir: Path) -> None:
        """Test undecodable bytes do not abort linting."""
        path = temp_dir / "latin1.m"
        path.write_bytes(b"// caf\xe9\nint a;\n")
        assert StyleLinter().lint_file(path) == []


class TestLintPaths:
    """Tests for directory scans."""

    def test_project_scan(self, objc_project: Path) -> None:
        """Test sources are found and vendored directories skipped."""
        report = StyleLinter().lint_paths([objc_project])

        assert report.files_scanned == 3
        assert report.files_skipped == 0
        assert len(report.violations) == 11
        assert all("Legacy" in v.file_path for v in report.violations)
        assert (report.error_count, report.warning_count, report.info_count) == (3, 7, 1)
        assert report.exit_code == 2
        assert report.completed_at is not None
        assert report.scan_path == str(objc_project)

    def test_checkout_under_excluded_directory_name(self, temp_dir: Path) -> None:
        """Test directories above the scan root do not trigger excludes."""
        sources = temp_dir / "build" / "repo" / "Sources"
        (sources / "Pods").mkdir(parents=True)
        (sources / "bad.m").write_text("@interface bad_name : NSObject\n@end\n", encoding="utf-8")
        (sources / "Pods" / "vendor.m").write_text(
            "@interface vendor_name : NSObject\n@end\n", encoding="utf-8"
        )

        report = StyleLinter().lint_paths([sources])

        assert report.files_scanned == 1
        assert [v.name for v in report.violations if v.rule_id == "OBJC101"] == ["bad_name"]
        assert report.exit_code == 2

    def test_non_recursive(self, objc_project: Path) -> None:
        """Test subdirectories are skipped without recursion."""
        report = StyleLinter().lint_paths([objc_project / "Sources"], recursive=False)
        assert report.files_scanned == 2
        assert report.violations == []

    def test_cli_exclude_patterns(self, objc_project: Path) -> None:
        """Test extra exclude patterns."""
        report = StyleLinter().lint_paths([objc_project], exclude_patterns=["Legacy"])
        assert report.files_scanned == 2
        assert report.exit_code == 0

    def test_config_exclude_patterns(self, objc_project: Path) -> None:
        """Test excludes from configuration."""
        config = LintConfig(exclude=["*.h"])
        report = StyleLinter(config).lint_paths([objc_project])
        assert report.files_scanned == 2

    def test_configured_extensions(self, objc_project: Path) -> None:
        """Test only configured extensions are collected."""
        config = LintConfig(extensions=[".h"])
        report = StyleLinter(config).lint_paths([objc_project])
        assert report.files_scanned == 1

    def test_explicit_file_any_extension(self, objc_project: Path) -> None:
        """Test an explicitly named file is linted even if not .h/.m."""
        report = StyleLinter().lint_paths([objc_project / "README.txt"])
        assert report.files_scanned == 1

    def test_mixed_paths(self, objc_project: Path) -> None:
        """Test files and directories in one report."""
        legacy = objc_project / "Sources" / "Legacy" / "legacy.m"
        vendor = objc_project / "Pods"
        report = StyleLinter().lint_paths([legacy, vendor])
        # A named directory is scanned even if its own name is excluded
        assert report.files_scanned == 2
        assert report.scan_path == f"{legacy}, {vendor}"

    def test_missing_path(self, temp_dir: Path) -> None:
        """Test a missing path fails before scanning."""
        with pytest.raises(SourceReadError):
            StyleLinter().lint_paths([temp_dir / "nope"])

    def test_large_file_counted_as_skipped(self, objc_project: Path) -> None:
        """Test skipped files are counted."""
        report = StyleLinter(LintConfig(max_file_size=100)).lint_paths([objc_project])
        assert report.files_skipped == 3
        assert report.files_scanned == 0

    def test_violation_cap(self, objc_project: Path) -> None:
        """Test max_violations truncates the report."""
        report = StyleLinter(LintConfig(max_violations=5)).lint_paths([objc_project])
        assert len(report.violations) == 5
        assert report.truncated is True

    def test_lint_directory_rejects_file(self, objc_project: Path) -> None:
        """Test lint_directory requires a directory."""
        with pytest.raises(SourceReadError):
            StyleLinter().lint_directory(objc_project / "README.txt")

    def test_lint_directory(self, objc_project: Path) -> None:
        """Test lint_directory delegates to lint_paths."""
        report = StyleLinter().lint_directory(objc_project / "Sources")
        assert report.files_scanned == 3


class TestRuleManagement:
    """Tests for rule lookup and toggling."""

    def test_get_rule_normalises_id(self) -> None:
        """Test lookups are case-insensitive."""
        linter = StyleLinter()
        assert linter.get_rule(" objc101 ").rule_id == "OBJC101"
        assert linter.get_rule("NOPE") is None

    def test_enable_and_disable(self, dirty_source: str) -> None:
        """Test toggling a rule."""
        linter = create_linter()
        assert linter.disable_rule("OBJC114")
        assert all(v.rule_id != "OBJC114" for v in linter.lint_source(dirty_source))
        assert linter.enable_rule("OBJC114")
        assert any(v.rule_id == "OBJC114" for v in linter.lint_source(dirty_source))
        assert not linter.disable_rule("NOPE")

    def test_get_rules_returns_copy_of_list(self) -> None:
        """Test the rule list cannot be replaced from outside."""
        linter = StyleLinter()
        rules = linter.get_rules()
        rules.clear()
        assert len(linter.get_rules()) == 21
