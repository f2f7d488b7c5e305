"""Config subcommands.

- show: Display the effective configuration
- init: Write a default configuration file
"""

from __future__ import annotations

import typer

from objcstyle.cli.config import init, show

app = typer.Typer(
    name="config",
    help="Configuration management",
    add_completion=False,
)

app.command("show")(show.command)
app.command("init")(init.command)


@app.callback()
def main() -> None:
    """Configuration management for objcstyle.

    Settings are read from .objcstyle.yaml (or objcstyle.yaml) in the
    current directory; OBJCSTYLE_* environment variables override them.

    Configuration sections:
    - naming: type prefixes, hierarchy root classes
    - formatting: indent style, line length, final newline

    Examples:
        objcstyle config init
        objcstyle config show
    """
