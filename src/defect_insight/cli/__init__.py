"""CLI entry point; registers all subcommands."""

import typer

app = typer.Typer(
    name="defect-insight",
    help="Defect Insight - Metrics-Based Software Defect Detection",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .main import main as _main_callback  # noqa: F401, E402
from .detect import detect as _detect  # noqa: F401, E402
from .batch import batch as _batch  # noqa: F401, E402
from .history import history as _history  # noqa: F401, E402
from .dashboard import performance as _performance, training as _training  # noqa: F401, E402
from .serve import serve as _serve  # noqa: F401, E402
