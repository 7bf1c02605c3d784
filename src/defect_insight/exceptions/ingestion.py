"""Ingestion errors: unreadable CSV input, empty batches, failed downloads."""

from typing import Optional

from .base import DefectInsightError


class IngestionError(DefectInsightError):
    """Base class for CSV ingestion errors."""

    pass


class NoValidDataError(IngestionError):
    """Raised when a batch has no rows left to classify."""

    def __init__(
        self,
        reason: str = "No valid data found in the CSV file. Please check the format.",
        rows_read: Optional[int] = None,
    ):
        details = {}
        if rows_read is not None:
            details["rows_read"] = str(rows_read)
        super().__init__(reason, details=details)
        self.reason = reason
        self.rows_read = rows_read


class FetchError(IngestionError):
    """Raised when a CSV cannot be downloaded from a URL."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch CSV: {reason}", details={"url": url})
        self.url = url
        self.reason = reason
