"""Rich terminal reporter — severity pills, findings table, verdict."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from commitrules.findings.models import Finding, ValidationResult
from commitrules.rules.models import RuleSeverity

_SEVERITY_STYLE = {
    RuleSeverity.ERROR: "bold white on red",
    RuleSeverity.WARNING: "bold black on yellow",
}

_SEVERITY_ICON = {
    RuleSeverity.ERROR: "✖",
    RuleSeverity.WARNING: "⚠",
}


def _severity_pill(finding: Finding) -> Text:
    if finding.passed:
        return Text(" ✔ PASS ", style="bold black on green")
    style = _SEVERITY_STYLE.get(finding.severity, "")
    icon = _SEVERITY_ICON.get(finding.severity, "")
    return Text(f" {icon} {finding.severity.value.upper()} ", style=style)


def render(
    result: ValidationResult,
    *,
    header: str = "",
    show_passed: bool = False,
    fail_on_warnings: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Print validation results to the terminal using Rich."""
    console = console or Console(stderr=True)

    rows = result.findings if show_passed else result.failures
    if header:
        console.print(f"[dim]⧗ input:[/dim] {escape(header)}")

    if not result.failures and not show_passed:
        console.print("[bold green]✔ Commit message is valid.[/bold green]")
        return

    table = Table(
        title="Commit Message Findings",
        show_lines=False,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Severity", justify="center", width=12)
    table.add_column("Rule", style="cyan", min_width=18)
    table.add_column("Message")

    for finding in rows:
        table.add_row(_severity_pill(finding), Text(finding.rule_name), Text(finding.message or ""))

    console.print(table)
    console.print(
        f"[dim]{len(result.errors)} error(s), {len(result.warnings)} warning(s)[/dim]"
    )

    if result.has_errors or (fail_on_warnings and result.has_warnings):
        console.print("[bold red]✖ Commit message rejected.[/bold red]")
    elif result.has_warnings:
        console.print("[bold yellow]⚠ Warnings found. Commit allowed.[/bold yellow]")
    else:
        console.print("[bold green]✔ Commit message is valid.[/bold green]")
