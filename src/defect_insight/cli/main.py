"""Top-level callback: global options shared by every subcommand."""

from pathlib import Path
from typing import Optional

import typer

from .. import __version__
from ..config import load_config
from ..exceptions import DefectInsightError
from ..logging_config import setup_logging
from . import app
from ._common import console


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"defect-insight {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True, no_args_is_help=True)
def main(
    ctx: typer.Context,
    user: Optional[str] = typer.Option(
        None,
        "--user",
        "-u",
        help="Record results under this user (default: DEFECT_INSIGHT_USER)",
    ),
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        help="Directory holding the results database",
        file_okay=False,
        dir_okay=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """
    Classify software modules as defect-prone from static metrics.

    [bold cyan]Examples:[/bold cyan]

      defect-insight detect -m loc=120 -m v(g)=12

      defect-insight --user alice batch --file cm1.csv --report report.html

      defect-insight --user alice history
    """
    try:
        settings = load_config(
            config_file=config,
            user=user,
            data_dir=str(data_dir) if data_dir is not None else None,
            verbose=verbose,
            quiet=quiet,
        )
    except DefectInsightError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    setup_logging(settings.verbosity, log_file=settings.log_file)

    ctx.ensure_object(dict)
    ctx.obj["config"] = settings
