"""History CLI command -- list a user's past detection results."""

import json
from typing import Optional

import typer

from ..exceptions import PersistenceError
from ..metrics.models import DefectResult
from . import app
from ._common import console, get_config, get_identity, get_store


@app.command()
def history(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        help="Maximum number of results to list (default from config)",
        min=1,
        max=1000,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    clear: bool = typer.Option(
        False,
        "--clear",
        help="Delete this user's stored results",
    ),
):
    """
    List past detection results for the current user, newest first.

    [bold cyan]Examples:[/bold cyan]

      defect-insight --user alice history

      defect-insight --user alice history --json --limit 5
    """
    user_id = get_identity(ctx).current_user_id()
    if user_id is None:
        console.print(
            "[yellow]No user set.[/yellow] "
            "Pass [bold]--user NAME[/bold] or set DEFECT_INSIGHT_USER to record and view history."
        )
        raise typer.Exit(0)

    store = get_store(ctx)
    try:
        if clear:
            removed = store.clear(user_id)
            console.print(f"Removed {removed} result(s) for [bold]{user_id}[/bold].")
            raise typer.Exit(0)
        results = store.history(user_id, limit=limit or get_config(ctx).history_limit)
        summary = store.summary(user_id)
    except PersistenceError as e:
        console.print(f"[red]Error reading history:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        print(json.dumps([r.to_dict() for r in results], indent=2))
        return

    if not results:
        console.print("[yellow]No results recorded yet.[/yellow]")
        raise typer.Exit(0)

    _output_rich(results, summary)


def _output_rich(results: list[DefectResult], summary: dict[str, int]) -> None:
    """Human-readable Rich table output."""
    from rich.table import Table

    table = Table(
        title="Detection History",
        show_lines=False,
        pad_edge=True,
    )
    table.add_column("Date", style="green")
    table.add_column("Defect")
    table.add_column("Reason")
    table.add_column("LOC", justify="right")
    table.add_column("v(g)", justify="right")
    table.add_column("ev(g)", justify="right")

    for r in results:
        # Trim timestamp to just date + time (no microseconds/timezone)
        ts = r.created_at.replace("T", " ")
        if "+" in ts:
            ts = ts[: ts.index("+")]
        if "." in ts:
            ts = ts[: ts.index(".")]

        table.add_row(
            ts,
            "[red bold]YES[/red bold]" if r.defect_detected else "[green]NO[/green]",
            r.reason or "[dim]-[/dim]",
            f"{r.metrics.get('loc', 0):g}",
            f"{r.metrics.get('vg', 0):g}",
            f"{r.metrics.get('ev', 0):g}",
        )

    console.print()
    console.print(table)
    console.print(
        f"[dim]{summary['defective']} of {summary['total']} stored result(s) flagged defective[/dim]"
    )
    console.print()
