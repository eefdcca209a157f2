# src/skipunchanged/cli/formatter.py
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from skipunchanged.core.models import StepDecision


class PipelineFormatter:
    """
    Renders diffs and decision reports. Everything goes to the console it
    is given, which the CLI points at stderr so stdout stays pure YAML.
    """

    def __init__(self, console: Console):
        self.console = console

    def show_side_by_side(self, file_name: str, original_text: str, rewritten_text: str):
        old_syntax = Syntax(original_text.strip(), "yaml", theme="ansi_dark", line_numbers=True)
        new_syntax = Syntax(rewritten_text.strip(), "yaml", theme="monokai", line_numbers=True)

        layout_table = Table.grid(expand=True, padding=1)
        layout_table.add_column(ratio=1)
        layout_table.add_column(ratio=1)

        layout_table.add_row(
            Panel(old_syntax, title=f"[bold red]ORIGINAL: {file_name}[/bold red]", border_style="red"),
            Panel(new_syntax, title=f"[bold green]REWRITTEN: {file_name}[/bold green]", border_style="green")
        )
        self.console.print(layout_table)

    def show_warnings(self, warnings: List[str]):
        for warning in warnings:
            self.console.print(f"[bold yellow]Warning:[/bold yellow] {escape(warning)}")

    def print_decisions(self, decisions: List[StepDecision], summary: Dict[str, Any]):
        table = Table(title="Step Decisions", show_lines=True, header_style="bold magenta")
        table.add_column("Location", style="cyan")
        table.add_column("Step", style="white")
        table.add_column("Patterns")
        table.add_column("Result", style="bold")
        table.add_column("Reason", style="dim")

        for d in decisions:
            result = "[yellow]SKIP[/yellow]" if d.skipped else "[green]RUN[/green]"
            table.add_row(
                escape(d.location), escape(d.label or "-"), escape("\n".join(d.patterns)), result, escape(d.reason)
            )

        self.console.print(table)
        self.console.print(Panel(
            f"[bold white]Summary[/bold white]\n"
            f"Evaluated: {summary['evaluated']}\n"
            f"Skipped:   [yellow]{summary['skipped']}[/yellow]\n"
            f"Kept:      [green]{summary['kept']}[/green]",
            border_style="dim",
            expand=False
        ))
