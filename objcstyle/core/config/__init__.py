"""
Configuration package for objcstyle.

Re-exports the configuration dataclasses:

    from objcstyle.core.config import LintConfig, NamingConfig, FormattingConfig

Utility functions (load_config, save_config, expand_env_vars) live in
objcstyle.core.config_loaders to avoid circular imports.
"""

from objcstyle.core.config.base import FormattingConfig, NamingConfig
from objcstyle.core.config.config import (
    DEFAULT_EXTENSIONS,
    MAX_FILE_SIZE,
    MAX_VIOLATIONS,
    VALID_SEVERITIES,
    LintConfig,
)

__all__ = [
    "LintConfig",
    "NamingConfig",
    "FormattingConfig",
    "DEFAULT_EXTENSIONS",
    "MAX_FILE_SIZE",
    "MAX_VIOLATIONS",
    "VALID_SEVERITIES",
]
