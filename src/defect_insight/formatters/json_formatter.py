"""JSON formatter for batch results."""

import json

from ..metrics.models import BatchResult
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render a batch as JSON."""

    def render(self, batch: BatchResult) -> None:
        print(self.format(batch))

    def format(self, batch: BatchResult) -> str:
        return json.dumps(batch.to_dict(), indent=2)
