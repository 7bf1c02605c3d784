"""Base formatter interface for batch result rendering."""

from abc import ABC, abstractmethod

from ..metrics.models import BatchResult


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, batch: BatchResult) -> None:
        """Render the batch to the terminal."""

    @abstractmethod
    def format(self, batch: BatchResult) -> str:
        """Return formatted string representation of the batch."""
