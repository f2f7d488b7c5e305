"""Tests for the objcstyle exception hierarchy."""

import pytest

from objcstyle.core.exceptions import (
    ConfigValidationError,
    ObjcStyleError,
    SourceError,
    SourceReadError,
    TokenizeError,
    UnknownRuleError,
    get_error_info,
    get_root_cause,
)


class TestHierarchy:
    """Tests for exception inheritance and attributes."""

    @pytest.mark.parametrize(
        "exc",
        [
            SourceReadError("missing", path="A.m"),
            TokenizeError("open comment", line=3),
            UnknownRuleError("OBJC999"),
            ConfigValidationError("bad", field="x"),
        ],
    )
    def test_all_derive_from_base(self, exc: ObjcStyleError) -> None:
        """Test every error can be caught as ObjcStyleError."""
        assert isinstance(exc, ObjcStyleError)
        assert exc.error_code.startswith("OS-")
        assert exc.how_to_fix

    def test_source_errors(self) -> None:
        """Test source error attributes."""
        read = SourceReadError("missing", path="A.m")
        tokenize = TokenizeError("open comment", line=3)
        assert isinstance(read, SourceError) and isinstance(tokenize, SourceError)
        assert read.path == "A.m"
        assert tokenize.line == 3

    def test_unknown_rule_message(self) -> None:
        """Test the rule id appears in the message."""
        exc = UnknownRuleError("OBJC999")
        assert str(exc) == "Unknown rule id: OBJC999"
        assert exc.error_code == "OS-RULE-001"

    def test_overrides_per_instance(self) -> None:
        """Test keyword overrides do not change the class defaults."""
        exc = ConfigValidationError("bad", error_code="OS-VAL-999", how_to_fix=["Fix it"])
        assert exc.error_code == "OS-VAL-999"
        assert exc.how_to_fix == ["Fix it"]
        assert ConfigValidationError.error_code == "OS-VAL-001"


class TestErrorInfo:
    """Tests for get_error_info and get_root_cause."""

    def test_objcstyle_error_info(self) -> None:
        """Test info comes from the exception itself."""
        info = get_error_info(TokenizeError("x"))
        assert info["error_code"] == "OS-SRC-002"

    def test_standard_error_info(self) -> None:
        """Test builtin exceptions are mapped."""
        assert get_error_info(FileNotFoundError("x"))["error_code"] == "OS-FILE-001"
        assert get_error_info(IsADirectoryError("x"))["error_code"] == "OS-SYS-001"

    def test_unknown_error_info(self) -> None:
        """Test the fallback for unmapped exceptions."""
        assert get_error_info(KeyError("x"))["error_code"] == "OS-ERR-999"

    def test_root_cause(self) -> None:
        """Test the chain is followed to the original error."""
        try:
            try:
                raise OSError("disk")
            except OSError as e:
                raise SourceReadError("cannot read") from e
        except SourceReadError as exc:
            assert isinstance(get_root_cause(exc), OSError)
            assert isinstance(exc.get_root_cause(), OSError)
