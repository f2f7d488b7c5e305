"""
Configuration Loading and Management Functions.

Handles discovery, loading, environment overrides and saving of the
objcstyle configuration file.

Configuration precedence
------------------------
1. Environment variables (OBJCSTYLE_*)
2. YAML file (.objcstyle.yaml or objcstyle.yaml)
3. Dataclass defaults

Environment Variables
---------------------
Values in the YAML file may reference the environment with ${VAR_NAME} or
${VAR_NAME:default}. The following variables override file values:

    OBJCSTYLE_INDENT_STYLE       formatting.indent_style
    OBJCSTYLE_MAX_LINE_LENGTH    formatting.max_line_length
    OBJCSTYLE_CLASS_PREFIXES     naming.class_prefixes (comma separated)
    OBJCSTYLE_DISABLED_RULES     disabled_rules (comma separated)
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from objcstyle.core.config import LintConfig
from objcstyle.core.exceptions import ConfigValidationError
from objcstyle.core.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILENAMES = [".objcstyle.yaml", "objcstyle.yaml"]
ENV_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Handles nested structures including:
    - Strings with ${VAR_NAME} or ${VAR_NAME:default} syntax
    - Nested dictionaries
    - Nested lists

    Args:
        value: Configuration value (string, dict, list, or primitive)

    Returns:
        Value with all environment variables expanded
    """
    if isinstance(value, str):

        def replace_env_var(match: re.Match) -> str:
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return ENV_PATTERN.sub(replace_env_var, value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def _split_list(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment variable overrides to raw configuration data.

    Overrides are applied before the dataclasses are built so that
    overridden values go through the same validation as file values.
    """
    formatting = dict(data.get("formatting") or {})
    naming = dict(data.get("naming") or {})

    indent_style = os.environ.get("OBJCSTYLE_INDENT_STYLE")
    if indent_style:
        formatting["indent_style"] = indent_style.strip().lower()

    max_line_length = os.environ.get("OBJCSTYLE_MAX_LINE_LENGTH")
    if max_line_length:
        try:
            formatting["max_line_length"] = int(max_line_length)
        except ValueError as e:
            raise ConfigValidationError(
                f"OBJCSTYLE_MAX_LINE_LENGTH must be an integer, got {max_line_length!r}",
                field="formatting.max_line_length",
                value=max_line_length,
            ) from e

    prefixes = os.environ.get("OBJCSTYLE_CLASS_PREFIXES")
    if prefixes:
        naming["class_prefixes"] = _split_list(prefixes)

    disabled = os.environ.get("OBJCSTYLE_DISABLED_RULES")
    if disabled:
        data["disabled_rules"] = _split_list(disabled)

    if formatting:
        data["formatting"] = formatting
    if naming:
        data["naming"] = naming
    return data


def find_config_file(base_path: Optional[Path] = None) -> Optional[Path]:
    """Return the first config file found in base_path, or None."""
    base_path = base_path or Path.cwd()
    for filename in CONFIG_FILENAMES:
        candidate = base_path / filename
        if candidate.is_file():
            return candidate
    return None


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(
            f"Could not parse {config_path}: {e}", field=str(config_path)
        ) from e
    except OSError as e:
        raise ConfigValidationError(
            f"Could not read {config_path}: {e}", field=str(config_path)
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"{config_path} must contain a mapping at the top level",
            field=str(config_path),
            value=data,
        )
    return data


def load_config(
    config_path: Optional[Path] = None, base_path: Optional[Path] = None
) -> LintConfig:
    """
    Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to config file. Discovered in base_path when omitted.
        base_path: Directory searched for a config file. Defaults to cwd.

    Returns:
        LintConfig object with all settings.

    Raises:
        ConfigValidationError: If an explicit config_path does not exist, or
            the file is malformed or contains invalid values.
    """
    if config_path is None:
        config_path = find_config_file(base_path)
    elif not config_path.is_file():
        raise ConfigValidationError(
            f"Config file not found: {config_path}", field="config_path", value=str(config_path)
        )

    data: Dict[str, Any] = {}
    if config_path is not None:
        logger.debug("Loading config", path=config_path)
        data = expand_env_vars(_read_yaml(config_path))

    data = _apply_env_overrides(data)
    return LintConfig.from_dict(data)


def save_config(config: LintConfig, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)


def dump_config(config: LintConfig) -> str:
    """Render configuration as a YAML string."""
    return yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)
