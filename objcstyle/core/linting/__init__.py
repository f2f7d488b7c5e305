"""Linting Module.

Objective-C style-convention linter: tokenizer, declaration extractor,
rule engine and reporter.
"""

from objcstyle.core.linting.declarations import (
    Declaration,
    DeclarationKind,
    extract_declarations,
)
from objcstyle.core.linting.formatters import (
    OUTPUT_FORMATS,
    format_compact,
    format_json,
    format_sarif,
)
from objcstyle.core.linting.linter import StyleLinter, create_linter
from objcstyle.core.linting.report import (
    LintReport,
    RuleCategory,
    StyleViolation,
    ViolationSeverity,
)
from objcstyle.core.linting.rules import RuleTarget, StyleRule, default_rules
from objcstyle.core.linting.sarif_formatter import convert_to_sarif, save_sarif
from objcstyle.core.linting.tokenizer import Token, TokenType, tokenize

__all__ = [
    "Declaration",
    "DeclarationKind",
    "extract_declarations",
    "OUTPUT_FORMATS",
    "format_compact",
    "format_json",
    "format_sarif",
    "StyleLinter",
    "create_linter",
    "LintReport",
    "RuleCategory",
    "StyleViolation",
    "ViolationSeverity",
    "RuleTarget",
    "StyleRule",
    "default_rules",
    "convert_to_sarif",
    "save_sarif",
    "Token",
    "TokenType",
    "tokenize",
]
