"""Rich terminal formatter for batch results."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..metrics.models import BatchResult, DefectVerdict
from .base import BaseFormatter


def verdict_label(verdict: DefectVerdict) -> str:
    if verdict.defect_detected:
        return "[red bold]YES[/red bold]"
    return "[green]NO[/green]"


def _rate_style(percentage: float) -> str:
    if percentage >= 50:
        return "red bold"
    elif percentage >= 20:
        return "yellow"
    else:
        return "green"


class RichFormatter(BaseFormatter):
    """Summary panel followed by a per-module table."""

    def __init__(self, console: Optional[Console] = None, max_rows: Optional[int] = None) -> None:
        self.console = console or Console()
        self.max_rows = max_rows

    def render(self, batch: BatchResult) -> None:
        self._print_summary(batch)
        self._print_table(batch)

    def format(self, batch: BatchResult) -> str:
        # Rich output goes directly to console; return empty string
        self.render(batch)
        return ""

    def _print_summary(self, batch: BatchResult) -> None:
        style = _rate_style(batch.defect_percentage)
        body = (
            f"Total modules analyzed: [bold]{batch.total_modules}[/bold]\n"
            f"Defective modules:      [bold]{batch.defective_modules}[/bold]\n"
            f"Defect rate:            [{style}]{batch.defect_percentage:.1f}%[/{style}]"
        )
        self.console.print(Panel(body, title="[bold cyan]Analysis Summary[/bold cyan]", expand=False))

    def _print_table(self, batch: BatchResult) -> None:
        table = Table(title="Module Analysis Results", show_lines=False, pad_edge=True)
        table.add_column("#", style="bold", justify="right")
        table.add_column("Defect")
        table.add_column("Reason")
        table.add_column("LOC", justify="right")
        table.add_column("v(g)", justify="right")
        table.add_column("ev(g)", justify="right")
        table.add_column("Effort", justify="right")

        results = batch.results
        if self.max_rows is not None:
            results = results[: self.max_rows]

        for r in results:
            m = r.metrics
            table.add_row(
                str(r.index),
                verdict_label(r.verdict),
                r.verdict.reason or "[dim]N/A[/dim]",
                f"{m.loc:g}",
                f"{m.vg:g}",
                f"{m.ev:g}",
                f"{m.e:g}",
            )

        self.console.print()
        self.console.print(table)
        hidden = len(batch.results) - len(results)
        if hidden > 0:
            self.console.print(f"[dim]... {hidden} more module(s) not shown[/dim]")
        self.console.print()
