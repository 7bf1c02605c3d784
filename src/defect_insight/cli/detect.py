"""Single-module detection command."""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.panel import Panel
from rich.table import Table

from ..batch import detect as run_detect
from ..metrics.models import CANONICAL_FIELDS, DefectVerdict, MetricsRecord
from . import app
from ._common import console, get_config, get_identity, get_store, parse_metric_options


@app.command()
def detect(
    ctx: typer.Context,
    metric: Optional[List[str]] = typer.Option(
        None,
        "--metric",
        "-m",
        help="Metric as key=value; canonical names or aliases like v(g). Repeatable.",
    ),
    input_file: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="JSON file holding one object of metric values",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Classify a single module from its metrics.

    Metrics not given default to 0. Values from [bold]--metric[/bold] override
    values read from [bold]--input[/bold].

    [bold cyan]Examples:[/bold cyan]

      defect-insight detect -m loc=60 -m branchCount=25 -m vg=2

      defect-insight detect --input module.json --json
    """
    raw: dict = {}
    if input_file is not None:
        try:
            loaded = json.loads(input_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            console.print(f"[red]Error reading {input_file}:[/red] {e}")
            raise typer.Exit(1)
        if not isinstance(loaded, dict):
            console.print(f"[red]Error:[/red] {input_file} must contain a JSON object")
            raise typer.Exit(1)
        raw.update(loaded)
    raw.update(parse_metric_options(metric or []))

    if not raw:
        console.print("[yellow]No metrics given.[/yellow] Use --metric key=value or --input FILE.")
        raise typer.Exit(2)

    config = get_config(ctx)
    metrics, verdict = run_detect(
        raw,
        identity=get_identity(ctx),
        store=get_store(ctx),
        thresholds=config.thresholds,
    )

    if json_output:
        print(json.dumps({"metrics": metrics.to_dict(), **verdict.to_dict()}, indent=2))
    else:
        _output_rich(metrics, verdict)


def _output_rich(metrics: MetricsRecord, verdict: DefectVerdict) -> None:
    if verdict.defect_detected:
        body = f"[red bold]Defect detected[/red bold]\n{verdict.reason}"
        border = "red"
    else:
        body = "[green bold]No defect detected[/green bold]"
        border = "green"

    table = Table(show_header=True, pad_edge=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    for name in CANONICAL_FIELDS:
        table.add_row(name, f"{metrics.get(name):g}")

    console.print()
    console.print(Panel(body, title="[bold]Detection Result[/bold]", border_style=border, expand=False))
    console.print(table)
    console.print()
