"""Init command - Write a default configuration file."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from objcstyle.cli.console import ErrorRenderer, get_console, tip
from objcstyle.core.config import LintConfig
from objcstyle.core.config_loaders import CONFIG_FILENAMES, save_config

EXIT_TOOL_FAILURE = 3


def command(
    path: Path = typer.Argument(
        Path(CONFIG_FILENAMES[0]), help="Where to write the config file"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing file"
    ),
) -> None:
    """Write a config file holding the default settings.

    Examples:
        objcstyle config init
        objcstyle config init ci/objcstyle.yaml --force
    """
    console = get_console()
    if path.exists() and not force:
        console.print(f"[red]{escape(str(path))} already exists[/red]")
        tip("Use --force to overwrite it")
        raise typer.Exit(code=1)

    try:
        save_config(LintConfig(), path)
    except OSError as e:
        ErrorRenderer.render(e, context=f"While writing {path}")
        raise typer.Exit(code=EXIT_TOOL_FAILURE)

    console.print(f"[green]✓ Wrote {escape(str(path))}[/green]")
