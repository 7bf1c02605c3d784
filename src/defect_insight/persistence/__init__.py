"""Per-user persistence of classification results (SQLite)."""

from .database import ResultsDB
from .store import ResultSink, ResultStore

__all__ = ["ResultsDB", "ResultStore", "ResultSink"]
