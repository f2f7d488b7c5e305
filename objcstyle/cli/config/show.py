"""Show command - Display the effective configuration.

Prints the configuration objcstyle would lint with (defaults, then the
config file, then OBJCSTYLE_* environment overrides) as YAML.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from objcstyle.cli.console import ErrorRenderer
from objcstyle.core.config_loaders import dump_config, find_config_file, load_config

EXIT_TOOL_FAILURE = 3


def command(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file (default: .objcstyle.yaml in cwd)"
    ),
) -> None:
    """Show the effective configuration as YAML.

    Examples:
        objcstyle config show
        OBJCSTYLE_INDENT_STYLE=spaces objcstyle config show
    """
    try:
        source = config_file or find_config_file(Path.cwd())
        config = load_config(config_file, base_path=Path.cwd())
    except Exception as e:
        ErrorRenderer.render(e)
        raise typer.Exit(code=EXIT_TOOL_FAILURE)

    typer.echo(f"# Source: {source if source else 'defaults'}")
    typer.echo(dump_config(config), nl=False)
