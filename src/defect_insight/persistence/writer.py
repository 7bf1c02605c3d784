"""Write classification results to the results database."""

import json
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Optional

from ..metrics.models import DefectVerdict, MetricsRecord


def save_result(
    conn: sqlite3.Connection,
    user_id: str,
    metrics: MetricsRecord,
    verdict: DefectVerdict,
    created_at: Optional[str] = None,
) -> str:
    """Insert one result row and return its id.

    Parameters
    ----------
    conn:
        An open connection from ``ResultsDB.connect()``.
    user_id:
        Owner of the result.
    metrics:
        The record that was classified; stored as canonical-name JSON.
    verdict:
        The classifier's output.
    created_at:
        ISO-8601 timestamp; defaults to now (UTC).
    """
    result_id = str(uuid.uuid4())
    conn.execute(
        """
        INSERT INTO defect_results (id, user_id, metrics, defect_detected, reason, created_at)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (
            result_id,
            user_id,
            json.dumps(metrics.to_dict()),
            1 if verdict.defect_detected else 0,
            verdict.reason,
            created_at or datetime.now(timezone.utc).isoformat(),
        ),
    )
    conn.commit()
    return result_id


def delete_user_results(conn: sqlite3.Connection, user_id: str) -> int:
    """Remove every stored result for ``user_id``; returns rows deleted."""
    cur = conn.execute("DELETE FROM defect_results WHERE user_id = ?", (user_id,))
    conn.commit()
    return cur.rowcount
