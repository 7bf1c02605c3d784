"""Per-user result store used by the detection flows.

Opens a short-lived connection per call so the CLI, the batch loop and the
HTTP handlers can share one store object without sharing a connection.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional, Protocol, Union

from ..exceptions import PersistenceError
from ..logging_config import get_logger
from ..metrics.models import DefectResult, DefectVerdict, MetricsRecord
from .database import ResultsDB
from .reader import count_results, load_history
from .writer import delete_user_results, save_result

logger = get_logger(__name__)


class ResultSink(Protocol):
    """What the detection flows need from a store."""

    def save_result(
        self, user_id: str, metrics: MetricsRecord, verdict: DefectVerdict
    ) -> str: ...


class ResultStore:
    """SQLite-backed :class:`ResultSink` with history queries."""

    def __init__(self, db_path: Union[str, Path]) -> None:
        self.db_path = Path(db_path)

    def save_result(
        self,
        user_id: str,
        metrics: MetricsRecord,
        verdict: DefectVerdict,
        created_at: Optional[str] = None,
    ) -> str:
        """Persist one verdict. Raises PersistenceError on any database failure."""
        try:
            with ResultsDB(self.db_path) as db:
                result_id = save_result(db.conn, user_id, metrics, verdict, created_at)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError("write", str(e), user_id=user_id) from e
        logger.debug("Stored result %s for %s", result_id, user_id)
        return result_id

    def history(self, user_id: str, limit: int = 10) -> list[DefectResult]:
        """Newest-first results for ``user_id``."""
        if not self.db_path.exists():
            return []
        try:
            with ResultsDB(self.db_path) as db:
                return load_history(db.conn, user_id, limit=limit)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError("read", str(e), user_id=user_id) from e

    def summary(self, user_id: str) -> dict[str, int]:
        """Total/defective counts across a user's whole history."""
        if not self.db_path.exists():
            return {"total": 0, "defective": 0}
        try:
            with ResultsDB(self.db_path) as db:
                return count_results(db.conn, user_id)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError("read", str(e), user_id=user_id) from e

    def clear(self, user_id: str) -> int:
        """Delete a user's history; returns the number of rows removed."""
        if not self.db_path.exists():
            return 0
        try:
            with ResultsDB(self.db_path) as db:
                return delete_user_results(db.conn, user_id)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError("delete", str(e), user_id=user_id) from e
