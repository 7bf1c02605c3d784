"""Model performance and training-data dashboards."""

import json

import typer
from rich.panel import Panel
from rich.table import Table

from ..dashboard import get_model_performance, get_training_data
from . import app
from ._common import console


def _bar(value: float, width: int = 30) -> str:
    filled = round(value * width)
    return "█" * filled + "░" * (width - filled)


@app.command()
def performance(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show accuracy, precision, recall, F1 and the confusion matrix."""
    perf = get_model_performance()
    if json_output:
        print(json.dumps(perf.to_dict(), indent=2))
        return

    scores = Table(title="Model Performance", pad_edge=True)
    scores.add_column("Metric", style="cyan")
    scores.add_column("Score", justify="right")
    scores.add_column("")
    for label, value in (
        ("Accuracy", perf.accuracy),
        ("Precision", perf.precision),
        ("Recall", perf.recall),
        ("F1 Score", perf.f1_score),
    ):
        scores.add_row(label, f"{value:.0%}", f"[magenta]{_bar(value)}[/magenta]")

    cm = perf.confusion_matrix
    matrix = Table(title="Confusion Matrix", pad_edge=True)
    matrix.add_column("")
    matrix.add_column("Predicted defect", justify="right")
    matrix.add_column("Predicted clean", justify="right")
    matrix.add_row("Actual defect", f"[green]{cm.true_positive}[/green]", f"[red]{cm.false_negative}[/red]")
    matrix.add_row("Actual clean", f"[red]{cm.false_positive}[/red]", f"[green]{cm.true_negative}[/green]")

    console.print()
    console.print(scores)
    console.print(matrix)
    console.print()


@app.command()
def training(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show the training-data class balance and feature importances."""
    data = get_training_data()
    if json_output:
        print(json.dumps(data.to_dict(), indent=2))
        return

    total = data.total_samples
    console.print()
    console.print(
        Panel(
            f"Defective:     [red]{data.defective}[/red] ({data.defective / total:.0%})\n"
            f"Non-defective: [green]{data.non_defective}[/green] ({data.non_defective / total:.0%})",
            title="[bold cyan]Defect Distribution[/bold cyan]",
            expand=False,
        )
    )

    table = Table(title="Feature Importance", pad_edge=True)
    table.add_column("Feature", style="cyan")
    table.add_column("Importance", justify="right")
    table.add_column("")
    top = max(f.importance for f in data.feature_importance)
    for f in data.feature_importance:
        table.add_row(f.name, f"{f.importance:.2f}", f"[magenta]{_bar(f.importance / top)}[/magenta]")
    console.print(table)
    console.print()
