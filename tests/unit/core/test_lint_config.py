"""Tests for LintConfig and its sections."""

import pytest

from objcstyle.core.config import (
    DEFAULT_EXTENSIONS,
    FormattingConfig,
    LintConfig,
    NamingConfig,
)
from objcstyle.core.exceptions import ConfigValidationError


class TestDefaults:
    """Tests for default configuration values."""

    def test_lint_config_defaults(self) -> None:
        """Test top-level defaults."""
        config = LintConfig()
        assert config.extensions == DEFAULT_EXTENSIONS
        assert config.exclude == []
        assert config.disabled_rules == []
        assert config.max_violations == 500

    def test_section_defaults(self) -> None:
        """Test naming and formatting defaults."""
        config = LintConfig()
        assert config.naming.class_prefixes == []
        assert config.naming.min_prefix_length == 2
        assert "NSObject" in config.naming.root_classes
        assert config.formatting.indent_style == "tabs"
        assert config.formatting.max_line_length == 120
        assert config.formatting.require_final_newline is True

    def test_default_lists_not_shared(self) -> None:
        """Test mutable defaults are per instance."""
        first = LintConfig()
        first.extensions.append(".c")
        assert LintConfig().extensions == DEFAULT_EXTENSIONS


class TestValidation:
    """Tests for __post_init__ validation."""

    @pytest.mark.parametrize(
        "kwargs,field",
        [
            ({"extensions": ["m"]}, "extensions"),
            ({"exclude": "Pods"}, "exclude"),
            ({"severity_overrides": {"OBJC101": "fatal"}}, "severity_overrides.OBJC101"),
            ({"max_violations": 0}, "max_violations"),
            ({"max_file_size": -1}, "max_file_size"),
            ({"disabled_rules": [101]}, "disabled_rules"),
            ({"exclude": ["Pods", None]}, "exclude"),
            ({"extensions": [".m", 3]}, "extensions"),
            ({"severity_overrides": {101: "error"}}, "severity_overrides"),
        ],
    )
    def test_invalid_top_level(self, kwargs: dict, field: str) -> None:
        """Test invalid top-level values name the field."""
        with pytest.raises(ConfigValidationError) as exc_info:
            LintConfig(**kwargs)
        assert exc_info.value.field == field

    def test_invalid_indent_style(self) -> None:
        """Test unknown indent styles."""
        with pytest.raises(ConfigValidationError) as exc_info:
            FormattingConfig(indent_style="mixed")
        assert exc_info.value.field == "formatting.indent_style"

    def test_negative_line_length(self) -> None:
        """Test max_line_length must not be negative."""
        with pytest.raises(ConfigValidationError):
            FormattingConfig(max_line_length=-1)

    def test_invalid_prefix(self) -> None:
        """Test prefixes must be capital letters."""
        with pytest.raises(ConfigValidationError) as exc_info:
            NamingConfig(class_prefixes=["xyz"])
        assert exc_info.value.value == "xyz"

    def test_invalid_min_prefix_length(self) -> None:
        """Test min_prefix_length must be positive."""
        with pytest.raises(ConfigValidationError):
            NamingConfig(min_prefix_length=0)

    def test_invalid_root_classes(self) -> None:
        """Test root classes must be names."""
        with pytest.raises(ConfigValidationError) as exc_info:
            NamingConfig(root_classes=["NSObject", 1])
        assert exc_info.value.field == "naming.root_classes"

    def test_severity_case_insensitive(self) -> None:
        """Test severities are accepted in any case."""
        config = LintConfig(severity_overrides={"OBJC101": "Warning"})
        assert config.severity_overrides == {"OBJC101": "Warning"}


class TestFromDict:
    """Tests for dictionary conversion."""

    def test_from_none(self) -> None:
        """Test None yields defaults."""
        assert LintConfig.from_dict(None) == LintConfig()

    def test_nested_sections(self) -> None:
        """Test nested sections are built."""
        config = LintConfig.from_dict(
            {
                "disabled_rules": ["FMT203"],
                "naming": {"class_prefixes": ["XYZ"]},
                "formatting": {"indent_style": "spaces", "max_line_length": 100},
            }
        )
        assert config.disabled_rules == ["FMT203"]
        assert config.naming.class_prefixes == ["XYZ"]
        assert config.formatting.indent_style == "spaces"
        assert config.formatting.max_line_length == 100

    def test_unknown_keys_ignored(self) -> None:
        """Test unknown keys do not fail loading."""
        config = LintConfig.from_dict({"colour": "red", "formatting": {"tab_size": 8}})
        assert config == LintConfig()

    def test_section_must_be_mapping(self) -> None:
        """Test a scalar section is rejected."""
        with pytest.raises(ConfigValidationError) as exc_info:
            LintConfig.from_dict({"naming": "XYZ"})
        assert exc_info.value.field == "naming"

    def test_root_must_be_mapping(self) -> None:
        """Test a list root is rejected."""
        with pytest.raises(ConfigValidationError):
            LintConfig.from_dict(["not", "a", "mapping"])  # type: ignore[arg-type]

    def test_to_dict_round_trip(self) -> None:
        """Test to_dict output loads back to an equal config."""
        config = LintConfig(
            exclude=["Vendor"],
            naming=NamingConfig(class_prefixes=["ACME"]),
            formatting=FormattingConfig(max_line_length=80),
        )
        assert LintConfig.from_dict(config.to_dict()) == config
