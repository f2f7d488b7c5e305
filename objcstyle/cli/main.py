"""objcstyle CLI - Main application entry point.

Registers the lint commands and the config command group.
"""

from __future__ import annotations

from typing import Optional

import typer

from objcstyle.cli.config import config_app
from objcstyle.cli.lint import categories_command, check_command, rules_command
from objcstyle.core.logging import configure_logging

app = typer.Typer(
    name="objcstyle",
    help="Style-convention linter for Objective-C",
    add_completion=False,
    no_args_is_help=True,
)

app.command("check", rich_help_panel="Lint")(check_command)
app.command("rules", rich_help_panel="Lint")(rules_command)
app.command("categories", rich_help_panel="Lint")(categories_command)
app.add_typer(config_app, name="config", rich_help_panel="System")


def version_callback(value: bool) -> None:
    """Show version and exit.

    Args:
        value: True if --version flag provided
    """
    if value:
        from objcstyle import __version__

        typer.echo(f"objcstyle version {__version__}")
        raise typer.Exit()


def verbose_callback(value: bool) -> None:
    """Enable verbose/debug output and traceback display for errors.

    Args:
        value: True if --verbose flag provided
    """
    if value:
        configure_logging(level="DEBUG")

        from objcstyle.cli.console import set_verbose_mode

        set_verbose_mode(True)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        callback=verbose_callback,
        is_eager=True,
        help="Enable verbose/debug output for all commands",
    ),
) -> None:
    """objcstyle - Objective-C style-convention linter.

    Checks naming conventions (classes, protocols, categories, methods,
    properties, constants, enumerations) and whitespace conventions.

    Examples:
        # Lint a source tree
        objcstyle check Sources/

        # CI: SARIF for code scanning, warnings fail the build
        objcstyle check . --format sarif --output objcstyle.sarif --fail-on-warning

        # See what is checked
        objcstyle rules

    For help on a specific command:
        objcstyle <command> --help
    """


def cli_main() -> None:
    """Console script entry point."""
    app()
