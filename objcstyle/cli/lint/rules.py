"""Rules and categories commands - Inspect the rule catalogue."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from objcstyle.cli.console import ErrorRenderer, get_console
from objcstyle.cli.lint.check import EXIT_TOOL_FAILURE, severity_style
from objcstyle.core.config_loaders import load_config
from objcstyle.core.linting.linter import create_linter
from objcstyle.core.linting.report import RuleCategory


def rules_command(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file (default: .objcstyle.yaml in cwd)"
    ),
) -> None:
    """List available style rules.

    Severity and enabled state reflect the effective configuration.

    Examples:
        objcstyle rules
        objcstyle rules --config ci/objcstyle.yaml
    """
    try:
        linter = create_linter(load_config(config_file, base_path=Path.cwd()))
    except Exception as e:
        ErrorRenderer.render(e)
        raise typer.Exit(code=EXIT_TOOL_FAILURE)

    rules = linter.get_rules()

    table = Table(title="Style Rules")
    table.add_column("Rule ID", style="cyan", no_wrap=True)
    table.add_column("Category", style="yellow")
    table.add_column("Severity")
    table.add_column("Title", style="white")
    table.add_column("Enabled")

    for rule in rules:
        style = severity_style(rule.severity)
        enabled = "[green]Yes[/green]" if rule.enabled else "[red]No[/red]"
        table.add_row(
            rule.rule_id,
            rule.category.value,
            f"[{style}]{rule.severity.value}[/{style}]",
            rule.title,
            enabled,
        )

    console = get_console()
    console.print(table)
    console.print(f"\n[dim]Total rules: {len(rules)}[/dim]")


def categories_command() -> None:
    """List style rule categories.

    Examples:
        objcstyle categories
    """
    console = get_console()
    console.print("\n[bold]Style Rule Categories:[/bold]")
    for category in RuleCategory:
        console.print(f"  - {category.value}")
