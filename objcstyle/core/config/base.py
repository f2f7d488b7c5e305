"""
Naming and formatting configuration sections.

Provides the dataclasses behind the `naming:` and `formatting:` sections of
.objcstyle.yaml. Each section validates itself in __post_init__.
"""

import re
from dataclasses import dataclass, field
from typing import List

from objcstyle.core.exceptions import ConfigValidationError

INDENT_STYLES = ("tabs", "spaces")
PREFIX_PATTERN = re.compile(r"^[A-Z][A-Z0-9]*$")


@dataclass
class NamingConfig:
    """Naming convention configuration."""

    class_prefixes: List[str] = field(default_factory=list)
    min_prefix_length: int = 2
    root_classes: List[str] = field(default_factory=lambda: ["NSObject", "NSProxy"])

    def __post_init__(self) -> None:
        if not isinstance(self.class_prefixes, list):
            raise ConfigValidationError(
                "naming.class_prefixes must be a list",
                field="naming.class_prefixes",
                value=self.class_prefixes,
            )
        for prefix in self.class_prefixes:
            if not isinstance(prefix, str) or not PREFIX_PATTERN.match(prefix):
                raise ConfigValidationError(
                    f"Invalid class prefix: {prefix!r} (expected capital letters, e.g. 'XYZ')",
                    field="naming.class_prefixes",
                    value=prefix,
                )
        if not isinstance(self.min_prefix_length, int) or self.min_prefix_length < 1:
            raise ConfigValidationError(
                "naming.min_prefix_length must be a positive integer",
                field="naming.min_prefix_length",
                value=self.min_prefix_length,
            )
        if not isinstance(self.root_classes, list) or not all(
            isinstance(name, str) for name in self.root_classes
        ):
            raise ConfigValidationError(
                "naming.root_classes must be a list of class names",
                field="naming.root_classes",
                value=self.root_classes,
            )


@dataclass
class FormattingConfig:
    """Whitespace and layout configuration."""

    indent_style: str = "tabs"  # tabs, spaces
    max_line_length: int = 120  # 0 disables the check
    require_final_newline: bool = True

    def __post_init__(self) -> None:
        if self.indent_style not in INDENT_STYLES:
            raise ConfigValidationError(
                f"formatting.indent_style must be one of {', '.join(INDENT_STYLES)}",
                field="formatting.indent_style",
                value=self.indent_style,
            )
        if not isinstance(self.max_line_length, int) or self.max_line_length < 0:
            raise ConfigValidationError(
                "formatting.max_line_length must be zero or a positive integer",
                field="formatting.max_line_length",
                value=self.max_line_length,
            )
