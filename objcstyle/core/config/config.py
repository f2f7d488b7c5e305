"""
Main configuration class for objcstyle.

This module provides the LintConfig dataclass that aggregates the naming and
formatting sections and handles validation and dictionary conversion.

Configuration Hierarchy
-----------------------
    LintConfig
    ├── extensions, exclude          # Which files a directory scan visits
    ├── disabled_rules               # Rule ids switched off
    ├── severity_overrides           # Rule id -> error/warning/info
    ├── max_violations, max_file_size
    ├── NamingConfig                 # Type prefixes, hierarchy root classes
    └── FormattingConfig             # Indent style, line length, final newline

Usage Example
-------------
    from objcstyle.core.config_loaders import load_config

    config = load_config()
    config.formatting.indent_style  # "tabs"
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional

from objcstyle.core.config.base import FormattingConfig, NamingConfig
from objcstyle.core.exceptions import ConfigValidationError
from objcstyle.core.logging import get_logger

logger = get_logger(__name__)

VALID_SEVERITIES = ("error", "warning", "info")
DEFAULT_EXTENSIONS = [".h", ".m", ".mm"]
MAX_VIOLATIONS = 500
MAX_FILE_SIZE = 5_000_000  # 5MB


@dataclass
class LintConfig:
    """Main objcstyle configuration."""

    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude: List[str] = field(default_factory=list)
    disabled_rules: List[str] = field(default_factory=list)
    severity_overrides: Dict[str, str] = field(default_factory=dict)
    max_violations: int = MAX_VIOLATIONS
    max_file_size: int = MAX_FILE_SIZE
    naming: NamingConfig = field(default_factory=NamingConfig)
    formatting: FormattingConfig = field(default_factory=FormattingConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate_lists()
        for extension in self.extensions:
            if not isinstance(extension, str) or not extension.startswith("."):
                raise ConfigValidationError(
                    f"Extensions must start with '.', got {extension!r}",
                    field="extensions",
                    value=extension,
                )
        if not isinstance(self.severity_overrides, dict):
            raise ConfigValidationError(
                "severity_overrides must be a mapping of rule id to severity",
                field="severity_overrides",
                value=self.severity_overrides,
            )
        for rule_id, severity in self.severity_overrides.items():
            if not isinstance(rule_id, str):
                raise ConfigValidationError(
                    f"severity_overrides keys must be rule ids, got {rule_id!r}",
                    field="severity_overrides",
                    value=rule_id,
                )
            if str(severity).lower() not in VALID_SEVERITIES:
                raise ConfigValidationError(
                    f"Invalid severity {severity!r} for rule {rule_id} "
                    f"(expected one of {', '.join(VALID_SEVERITIES)})",
                    field=f"severity_overrides.{rule_id}",
                    value=severity,
                )
        if not isinstance(self.max_violations, int) or self.max_violations <= 0:
            raise ConfigValidationError(
                "max_violations must be a positive integer",
                field="max_violations",
                value=self.max_violations,
            )
        if not isinstance(self.max_file_size, int) or self.max_file_size <= 0:
            raise ConfigValidationError(
                "max_file_size must be a positive integer",
                field="max_file_size",
                value=self.max_file_size,
            )

    def _validate_lists(self) -> None:
        for name in ("extensions", "exclude", "disabled_rules"):
            value = getattr(self, name)
            if not isinstance(value, list):
                raise ConfigValidationError(
                    f"{name} must be a list", field=name, value=value
                )
            for item in value:
                if not isinstance(item, str):
                    raise ConfigValidationError(
                        f"{name} entries must be strings, got {item!r}",
                        field=name,
                        value=item,
                    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @staticmethod
    def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ConfigValidationError(
                f"Section '{name}' must be a mapping", field=name, value=section
            )
        return section

    @staticmethod
    def _filter_fields(cls_type: Any, data: Optional[Dict[str, Any]], prefix: str = "") -> Dict[str, Any]:
        """Filter dict to only keys that match dataclass fields, handling None."""
        if not data:
            return {}
        valid_keys = {f.name for f in fields(cls_type)}
        for key in data:
            if key not in valid_keys:
                logger.warning("Ignoring unknown config key", key=f"{prefix}{key}")
        return {k: v for k, v in data.items() if k in valid_keys}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "LintConfig":
        """Create LintConfig from dictionary."""
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigValidationError(
                "Configuration root must be a mapping", value=data
            )

        naming = NamingConfig(
            **cls._filter_fields(NamingConfig, cls._section(data, "naming"), "naming.")
        )
        formatting = FormattingConfig(
            **cls._filter_fields(
                FormattingConfig, cls._section(data, "formatting"), "formatting."
            )
        )
        top_level = cls._filter_fields(cls, data)
        top_level.pop("naming", None)
        top_level.pop("formatting", None)

        return cls(naming=naming, formatting=formatting, **top_level)
