"""Batch detection command -- classify every module in a CSV file."""

from pathlib import Path
from typing import Optional

import typer

from ..batch import process_batch
from ..exceptions import DefectInsightError
from ..formatters import RichFormatter, get_formatter
from ..ingestion import fetch_csv_url, load_metric_rows, read_csv_file
from ..logging_config import get_logger
from ..reporting import write_batch_report
from . import app
from ._common import console, err_console, get_config, get_identity, get_store

logger = get_logger(__name__)


@app.command()
def batch(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="CSV file of module metrics",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    url: Optional[str] = typer.Option(
        None,
        "--url",
        help="Download the CSV from this URL instead",
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        help="Output format: rich, json, csv",
    ),
    report: Optional[Path] = typer.Option(
        None,
        "--report",
        "-r",
        help="Write an HTML report to this file (or directory)",
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-t",
        help="Show at most this many rows in the terminal table",
        min=1,
    ),
):
    """
    Classify every module in a CSV file.

    The first line must be a header; v(g)-style and snake_case column names
    are accepted. Rows missing any of the twenty metrics are skipped.

    [bold cyan]Examples:[/bold cyan]

      defect-insight batch --file cm1.csv

      defect-insight batch --url https://example.com/kc1.csv --format json

      defect-insight batch -f cm1.csv --report reports/
    """
    if (file is None) == (url is None):
        console.print("[red]Error:[/red] give exactly one of --file or --url")
        raise typer.Exit(2)

    config = get_config(ctx)

    try:
        formatter = get_formatter(fmt)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)
    if isinstance(formatter, RichFormatter):
        formatter = RichFormatter(console=console, max_rows=top)

    try:
        if file is not None:
            raw_rows = read_csv_file(file)
        else:
            raw_rows = fetch_csv_url(url, timeout=config.fetch_timeout_seconds)
        rows = load_metric_rows(raw_rows)

        result = process_batch(
            rows,
            identity=get_identity(ctx),
            store=get_store(ctx),
            thresholds=config.thresholds,
        )
    except DefectInsightError as e:
        logger.debug("Batch failed", exc_info=True)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except UnicodeDecodeError as e:
        console.print(f"[red]Error:[/red] {file} is not a UTF-8 text file ({e.reason})")
        raise typer.Exit(1)

    formatter.render(result)

    if report is not None:
        report_path = write_batch_report(result, report)
        err_console.print(f"Report saved to: [bold green]{report_path}[/bold green]")
