"""
Centralized Exception Hierarchy for objcstyle.

This module defines all custom exceptions used throughout objcstyle.
All exceptions inherit from ObjcStyleError for easy catching.

Helpful Error Messages
----------------------
Each exception includes:
- error_code: Unique identifier for documentation lookup (e.g., "OS-SRC-001")
- why_it_happened: Explanation of the root cause
- how_to_fix: Actionable steps to resolve the issue

Usage
-----
    from objcstyle.core.exceptions import ObjcStyleError, SourceReadError

    try:
        violations = linter.lint_file(path)
    except SourceReadError as e:
        logger.error(f"Cannot lint {path}: {e}")
    except ObjcStyleError as e:
        logger.error(f"objcstyle error: {e}")

Exception Hierarchy
-------------------
    ObjcStyleError (base)
    ├── SourceError
    │   ├── SourceReadError
    │   └── TokenizeError
    ├── RuleError
    │   └── UnknownRuleError
    └── ValidationError
        └── ConfigValidationError
"""

import builtins
from typing import Any, List, Optional


def get_root_cause(exc: BaseException) -> BaseException:
    """Extract the root cause from a chain of exceptions.

    Follows nested __cause__ and __context__ attributes to find
    the original error that started the chain.

    Args:
        exc: Exception to analyze

    Returns:
        Root cause exception (may be the same as input)
    """
    seen = set()
    current = exc

    while current is not None:
        if id(current) in seen:
            break
        seen.add(id(current))

        # Prefer explicit cause over implicit context
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__context__ is not None:
            current = current.__context__
        else:
            break

    return current


class ObjcStyleError(Exception):
    """
    Base exception for all objcstyle errors.

    Example
    -------
        try:
            report = linter.lint_paths(paths)
        except ObjcStyleError as e:
            print(f"{e.error_code}: {e}")
            print(f"Fix: {e.how_to_fix}")
    """

    # Default error info - subclasses should override
    error_code: str = "OS-ERR-000"
    why_it_happened: str = "An unexpected error occurred"
    how_to_fix: List[str] = ["Check the error message for details"]

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        """Initialize ObjcStyleError with helpful information.

        Args:
            message: Human-readable error message
            error_code: Unique identifier (e.g., "OS-SRC-001")
            why_it_happened: Explanation of root cause
            how_to_fix: List of actionable fix suggestions
        """
        super().__init__(message)

        if error_code is not None:
            self.error_code = error_code
        if why_it_happened is not None:
            self.why_it_happened = why_it_happened
        if how_to_fix is not None:
            self.how_to_fix = how_to_fix

    @property
    def user_message(self) -> str:
        """Get the user-friendly error message."""
        return str(self)

    def get_root_cause(self) -> BaseException:
        """Get the root cause of this exception chain."""
        return get_root_cause(self)


# ============================================================================
# Source Exceptions
# ============================================================================


class SourceError(ObjcStyleError):
    """Base exception for problems with the files being linted."""

    error_code = "OS-SRC-000"
    why_it_happened = "A source file could not be processed"
    how_to_fix = ["Check that the path points to an Objective-C source file"]


class SourceReadError(SourceError):
    """
    Raised when a source file cannot be read.

    This can occur when:
    - The file does not exist
    - The file is not readable by the current user
    - The path is a directory where a file was expected
    """

    error_code = "OS-SRC-001"
    why_it_happened = "The source file could not be opened or read from disk"
    how_to_fix = [
        "Check that the file path is correct",
        "Ensure you have read permissions for the file",
    ]

    def __init__(self, message: str, path: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.path = path


class TokenizeError(SourceError):
    """
    Raised when source text cannot be split into tokens.

    Attributes
    ----------
    line : int
        1-based line where the offending construct starts
    """

    error_code = "OS-SRC-002"
    why_it_happened = (
        "The file contains a construct the tokenizer cannot close, "
        "such as a block comment without a terminating '*/'"
    )
    how_to_fix = [
        "Check that every '/*' comment has a matching '*/'",
        "Make sure the file compiles before linting it",
    ]

    def __init__(self, message: str, line: int = 0, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.line = line


# ============================================================================
# Rule Exceptions
# ============================================================================


class RuleError(ObjcStyleError):
    """Base exception for rule catalogue errors."""

    error_code = "OS-RULE-000"
    why_it_happened = "A lint rule could not be applied"
    how_to_fix = ["Run 'objcstyle rules' to see the available rules"]


class UnknownRuleError(RuleError):
    """Raised when configuration or the command line names a missing rule."""

    error_code = "OS-RULE-001"
    why_it_happened = "A rule id was given that does not match any known rule"
    how_to_fix = [
        "Run 'objcstyle rules' to list valid rule ids",
        "Check disabled_rules and severity_overrides in your config file",
    ]

    def __init__(self, rule_id: str, **kwargs: Any) -> None:
        super().__init__(f"Unknown rule id: {rule_id}", **kwargs)
        self.rule_id = rule_id


# ============================================================================
# Validation Exceptions
# ============================================================================


class ValidationError(ObjcStyleError):
    """Raised when input data or configuration fails validation."""

    error_code = "OS-VAL-000"
    why_it_happened = "Validation failed for input data or configuration"
    how_to_fix = [
        "Check the error message for specific validation failures",
        "Review the expected format or value constraints",
    ]


class ConfigValidationError(ValidationError):
    """
    Raised when configuration validation fails.

    Attributes
    ----------
    field : str
        The configuration field that failed validation
    value : any
        The invalid value
    """

    error_code = "OS-VAL-001"
    why_it_happened = (
        "A configuration value is invalid. "
        "The .objcstyle.yaml file may have incorrect settings"
    )
    how_to_fix = [
        "Check .objcstyle.yaml for syntax errors",
        "Verify the value type matches what's expected",
        "Run 'objcstyle config show' to view the effective settings",
        "Create a fresh file with 'objcstyle config init --force'",
    ]

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        super().__init__(
            message,
            error_code=error_code,
            why_it_happened=why_it_happened,
            how_to_fix=how_to_fix,
        )
        self.field = field
        self.value = value


# ============================================================================
# Error Info Lookup
# ============================================================================


# Mapping from standard exceptions to helpful error info
# Used by ErrorRenderer to provide context for non-objcstyle exceptions
STANDARD_ERROR_INFO: dict[type, dict[str, Any]] = {
    builtins.FileNotFoundError: {
        "error_code": "OS-FILE-001",
        "why_it_happened": "The specified file or directory could not be found",
        "how_to_fix": [
            "Check that the file path is correct",
            "Verify the file exists using your file explorer",
        ],
    },
    builtins.PermissionError: {
        "error_code": "OS-FILE-002",
        "why_it_happened": "You don't have permission to access this file or directory",
        "how_to_fix": [
            "Check file permissions: ls -la <file>",
            "Ensure you own the file or have read/write access",
        ],
    },
    UnicodeDecodeError: {
        "error_code": "OS-FILE-003",
        "why_it_happened": "The file is not valid UTF-8 text",
        "how_to_fix": [
            "Convert the file to UTF-8",
            "Exclude binary files with --exclude",
        ],
    },
    ValueError: {
        "error_code": "OS-VAL-002",
        "why_it_happened": "An invalid value was provided",
        "how_to_fix": [
            "Check the error message for the expected value format",
            "Verify your input matches the required type",
        ],
    },
    OSError: {
        "error_code": "OS-SYS-001",
        "why_it_happened": "A system-level error occurred",
        "how_to_fix": [
            "Check disk space and permissions",
            "Review system logs for more details",
        ],
    },
}


def get_error_info(exc: BaseException) -> dict[str, Any]:
    """Get helpful error information for any exception.

    Looks up the exception type in STANDARD_ERROR_INFO or extracts
    info from ObjcStyleError subclasses.

    Args:
        exc: Exception to get info for

    Returns:
        Dict with error_code, why_it_happened, how_to_fix
    """
    if isinstance(exc, ObjcStyleError):
        return {
            "error_code": exc.error_code,
            "why_it_happened": exc.why_it_happened,
            "how_to_fix": exc.how_to_fix,
        }

    exc_type = type(exc)
    if exc_type in STANDARD_ERROR_INFO:
        return STANDARD_ERROR_INFO[exc_type]

    # Check parent classes
    for parent_type, info in STANDARD_ERROR_INFO.items():
        if isinstance(exc, parent_type):
            return info

    return {
        "error_code": "OS-ERR-999",
        "why_it_happened": "An unexpected error occurred",
        "how_to_fix": [
            "Check the error message for details",
            "Re-run with --verbose to see the full traceback",
            "Report the issue if it persists",
        ],
    }
