"""Check command - Lint Objective-C sources.

Lints files and directories and reports violations as a rich table,
compiler-style lines, JSON or SARIF.

Exit codes for CI integration:
    0 = clean or info only, 1 = warnings, 2 = errors, 3 = tool failure
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from objcstyle.cli.console import ErrorRenderer, get_console, tip
from objcstyle.core.config_loaders import load_config
from objcstyle.core.exceptions import UnknownRuleError
from objcstyle.core.linting.formatters import (
    OUTPUT_FORMATS,
    format_compact,
    format_json,
    format_sarif,
    save_json,
    save_sarif,
)
from objcstyle.core.linting.linter import StyleLinter, create_linter
from objcstyle.core.linting.report import LintReport, StyleViolation, ViolationSeverity
from objcstyle.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_ROWS = 200  # Table rows shown without --details
EXIT_TOOL_FAILURE = 3


def severity_style(severity: ViolationSeverity) -> str:
    """Get Rich style for severity level.

    Args:
        severity: Severity level.

    Returns:
        Rich style string.
    """
    styles = {
        ViolationSeverity.ERROR: "red",
        ViolationSeverity.WARNING: "yellow",
        ViolationSeverity.INFO: "blue",
    }
    return styles.get(severity, "white")


def _display_summary_table(report: LintReport) -> None:
    summary_table = Table(title="Lint Summary", show_header=False)
    summary_table.add_column("Metric", style="cyan")
    summary_table.add_column("Value", style="white")

    summary_table.add_row("Paths", escape(report.scan_path))
    summary_table.add_row("Files Scanned", str(report.files_scanned))
    summary_table.add_row("Files Skipped", str(report.files_skipped))
    summary_table.add_row("Duration", f"{report.scan_duration_ms:.1f}ms")
    summary_table.add_row("Total Violations", str(len(report.violations)))

    get_console().print(summary_table)


def _display_severity_table(report: LintReport) -> None:
    severity_table = Table(title="Violations by Severity")
    severity_table.add_column("Severity", style="cyan")
    severity_table.add_column("Count", justify="right")

    severity_table.add_row(
        "[red]Error[/red]",
        f"[red]{report.error_count}[/red]" if report.error_count else "0",
    )
    severity_table.add_row(
        "[yellow]Warning[/yellow]",
        f"[yellow]{report.warning_count}[/yellow]" if report.warning_count else "0",
    )
    severity_table.add_row("[blue]Info[/blue]", str(report.info_count))

    get_console().print(severity_table)


def _display_violations(violations: List[StyleViolation], details: bool) -> None:
    console = get_console()
    table = Table(title="Violations")
    table.add_column("Severity", no_wrap=True)
    table.add_column("Rule", style="dim", no_wrap=True)
    table.add_column("Location", style="yellow")
    table.add_column("Message", style="white")

    shown = violations if details else violations[:DEFAULT_MAX_ROWS]
    for violation in shown:
        style = severity_style(violation.severity)
        location = f"{Path(violation.file_path).name}:{violation.line_number}:{violation.column}"
        table.add_row(
            f"[{style}]{violation.severity.value.upper()}[/{style}]",
            violation.rule_id,
            escape(location),
            escape(violation.message),
        )

    console.print(table)
    if len(shown) < len(violations):
        tip(f"{len(violations) - len(shown)} more violations hidden; use --details to list all")

    if details:
        console.print("\n[bold]Violation Details:[/bold]")
        for violation in shown:
            console.print(f"\n[cyan]{violation.rule_id}[/cyan]: {escape(violation.message)}")
            console.print(
                f"  File: {escape(violation.file_path)}:{violation.line_number}:{violation.column}"
            )
            console.print(f"  [green]Recommendation:[/green] {escape(violation.recommendation)}")


def _display_report(report: LintReport, details: bool = False) -> None:
    """Display lint report as rich tables.

    Args:
        report: Lint report to display.
        details: Whether to show every violation with recommendations.
    """
    console = get_console()
    console.print()
    _display_summary_table(report)
    console.print()
    _display_severity_table(report)
    console.print()

    if report.violations:
        _display_violations(report.violations, details)
        console.print()

    if report.truncated:
        console.print(
            f"[yellow]Report truncated at {len(report.violations)} violations[/yellow]"
        )

    if report.exit_code == 0:
        console.print("[green]✓ No style violations found[/green]")
    elif report.exit_code == 1:
        console.print("[yellow]⚠ Style warnings found - review recommended[/yellow]")
    else:
        console.print("[red]✗ Style errors found - action required[/red]")

    console.print(f"\n[dim]Exit code: {report.exit_code}[/dim]")


def _render(report: LintReport, output_format: str, linter: StyleLinter) -> str:
    if output_format == "compact":
        return format_compact(report)
    if output_format == "sarif":
        return format_sarif(report, rules=linter.get_rules())
    return format_json(report)


def _save_report(
    report: LintReport, output: Path, output_format: str, linter: StyleLinter
) -> None:
    """Save report to file in the chosen format (table saves JSON)."""
    if output_format == "sarif":
        save_sarif(report, output, rules=linter.get_rules())
    elif output_format == "compact":
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(format_compact(report) + "\n", encoding="utf-8")
    else:
        save_json(report, output)
    logger.info("Report saved", path=output, format=output_format)


def _build_linter(config_file: Optional[Path], disable: Optional[List[str]]) -> StyleLinter:
    config = load_config(config_file, base_path=Path.cwd())
    linter = create_linter(config)
    for rule_id in disable or []:
        if not linter.disable_rule(rule_id):
            raise UnknownRuleError(rule_id)
    return linter


def command(
    paths: List[Path] = typer.Argument(..., help="Files or directories to lint"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file (default: .objcstyle.yaml in cwd)"
    ),
    recursive: bool = typer.Option(
        True,
        "--recursive/--no-recursive",
        "-r/-R",
        help="Lint subdirectories recursively",
    ),
    exclude: Optional[List[str]] = typer.Option(
        None, "--exclude", "-e", help="Glob patterns to exclude"
    ),
    disable: Optional[List[str]] = typer.Option(
        None, "--disable", "-d", help="Rule ids to disable"
    ),
    output_format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help=f"Output format: {', '.join(OUTPUT_FORMATS)}",
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the report to a file"
    ),
    fail_on_warning: bool = typer.Option(
        False, "--fail-on-warning", help="Exit with code 2 on warnings (strict CI)"
    ),
    details: bool = typer.Option(
        False, "--details", help="Show every violation with its recommendation"
    ),
) -> None:
    """Lint Objective-C files and directories.

    Returns exit code for CI integration:
      0 = clean, 1 = warnings, 2 = errors, 3 = tool failure

    Examples:
        objcstyle check Sources/
        objcstyle check Foo.m Bar.h --format compact
        objcstyle check . --format sarif --output objcstyle.sarif
    """
    output_format = output_format.lower()
    if output_format not in OUTPUT_FORMATS:
        raise typer.BadParameter(
            f"must be one of {', '.join(OUTPUT_FORMATS)}", param_hint="--format"
        )

    try:
        linter = _build_linter(config_file, disable)
        report = linter.lint_paths(paths, recursive, exclude)

        if output:
            _save_report(report, output, output_format, linter)

        if output_format == "table":
            _display_report(report, details)
            if output:
                get_console().print(f"\n[green]Report saved to: {escape(str(output))}[/green]")
        elif not output:
            rendered = _render(report, output_format, linter)
            if rendered:
                typer.echo(rendered)

        exit_code = report.exit_code
        if fail_on_warning and exit_code == 1:
            exit_code = 2

        if exit_code > 0:
            raise typer.Exit(code=exit_code)

    except typer.Exit:
        raise
    except Exception as e:
        logger.debug("Check failed", error=str(e))
        ErrorRenderer.render(e)
        raise typer.Exit(code=EXIT_TOOL_FAILURE)
