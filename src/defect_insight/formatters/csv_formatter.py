"""CSV formatter for batch results."""

import csv
import io

from ..metrics.models import CANONICAL_FIELDS, BatchResult
from .base import BaseFormatter


class CsvFormatter(BaseFormatter):
    """Render one CSV row per module: index, verdict, reason, then all metrics."""

    def render(self, batch: BatchResult) -> None:
        print(self.format(batch), end="")

    def format(self, batch: BatchResult) -> str:
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["index", "defect_detected", "reason", *CANONICAL_FIELDS])
        for r in batch.results:
            writer.writerow([
                r.index,
                "true" if r.verdict.defect_detected else "false",
                r.verdict.reason or "",
                *(f"{r.metrics.get(name):g}" for name in CANONICAL_FIELDS),
            ])
        return output.getvalue()
