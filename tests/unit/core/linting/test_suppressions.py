"""Tests for inline suppression comments."""

from objcstyle.core.linting.linter import StyleLinter
from objcstyle.core.linting.suppressions import (
    ALL_RULES,
    Suppressions,
    parse_suppressions,
)
from objcstyle.core.linting.tokenizer import tokenize


def _parse(source: str) -> Suppressions:
    return parse_suppressions(tokenize(source))


class TestParseSuppressions:
    """Tests for directive parsing."""

    def test_same_line_with_ids(self) -> None:
        """Test disable with a rule list, ids are uppercased."""
        suppressions = _parse("NSString* a; // objcstyle:disable=FMT205, objc101\n")
        assert suppressions.by_line == {1: {"FMT205", "OBJC101"}}
        assert suppressions.file_wide == set()

    def test_disable_without_ids_covers_everything(self) -> None:
        """Test a bare directive."""
        suppressions = _parse("int a; // objcstyle:disable\n")
        assert suppressions.by_line == {1: {ALL_RULES}}

    def test_disable_next_line(self) -> None:
        """Test the directive applies to the following line."""
        suppressions = _parse("// objcstyle:disable-next-line=OBJC101\n@interface x : NSObject\n")
        assert suppressions.by_line == {2: {"OBJC101"}}

    def test_disable_file(self) -> None:
        """Test file-wide directives in block comments."""
        suppressions = _parse("int a;\n/* objcstyle:disable-file=FMT201,FMT202 */\n")
        assert suppressions.file_wide == {"FMT201", "FMT202"}
        assert suppressions.is_suppressed("FMT201", 99)

    def test_directive_inside_multiline_comment(self) -> None:
        """Test the line is that of the directive, not the comment start."""
        suppressions = _parse("/*\n * objcstyle:disable=FMT203\n */\n")
        assert suppressions.by_line == {2: {"FMT203"}}

    def test_misspelled_directives_ignored(self) -> None:
        """Test near-miss directive names."""
        suppressions = _parse("// objcstyle:disabled\n// objcstyle:disable-next\n")
        assert len(suppressions) == 0

    def test_directive_in_string_ignored(self) -> None:
        """Test only comments carry directives."""
        assert len(_parse('NSString *s = @"objcstyle:disable";\n')) == 0


class TestIsSuppressed:
    """Tests for suppression lookups."""

    def test_line_specific(self) -> None:
        """Test suppression only applies to its line."""
        suppressions = Suppressions()
        suppressions.add_line(3, frozenset({"OBJC109"}))
        assert suppressions.is_suppressed("OBJC109", 3)
        assert not suppressions.is_suppressed("OBJC109", 4)
        assert not suppressions.is_suppressed("OBJC110", 3)

    def test_tokenize_rule_cannot_be_suppressed(self) -> None:
        """Test OBJC000 ignores directives."""
        suppressions = Suppressions(file_wide={ALL_RULES, "OBJC000"})
        assert not suppressions.is_suppressed("OBJC000", 1)

    def test_len_counts_lines_and_file(self) -> None:
        """Test the number of suppression entries."""
        suppressions = Suppressions(file_wide={"FMT201"})
        suppressions.add_line(1, frozenset({"FMT202"}))
        suppressions.add_line(1, frozenset({"FMT203"}))
        assert len(suppressions) == 2


class TestLinterSuppression:
    """Tests for suppressions applied by the linter."""

    def test_suppressed_rule_is_dropped(self) -> None:
        """Test only the named rule is suppressed."""
        source = "@interface legacy_class : NSObject // objcstyle:disable=OBJC101\n@end\n"
        ids = [v.rule_id for v in StyleLinter().lint_source(source)]
        assert "OBJC101" not in ids
        assert "OBJC102" in ids

    def test_next_line_suppression(self) -> None:
        """Test disable-next-line on a property."""
        source = (
            "@interface XYZThing : NSObject\n"
            "// objcstyle:disable-next-line\n"
            "@property NSString* Title;\n"
            "@property NSString* Other;\n"
            "@end\n"
        )
        violations = StyleLinter().lint_source(source)
        assert {v.line_number for v in violations} == {4}

    def test_file_wide_suppression(self) -> None:
        """Test disable-file silences a rule everywhere."""
        source = "/* objcstyle:disable-file=FMT202 */\nint a;  \nint b;\t\n"
        assert [v.rule_id for v in StyleLinter().lint_source(source)] == []
