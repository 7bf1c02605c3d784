"""Read stored results back from the results database."""

import json
import sqlite3

from ..metrics.models import DefectResult


def load_history(conn: sqlite3.Connection, user_id: str, limit: int = 10) -> list[DefectResult]:
    """Return a user's most recent results, newest first.

    Parameters
    ----------
    conn:
        An open ``sqlite3.Connection``.
    user_id:
        Whose results to load.
    limit:
        Maximum number of rows.
    """
    rows = conn.execute(
        """
        SELECT id, user_id, metrics, defect_detected, reason, created_at
        FROM defect_results
        WHERE user_id = ?
        ORDER BY created_at DESC, rowid DESC
        LIMIT ?
        """,
        (user_id, limit),
    ).fetchall()
    return [_hydrate(row) for row in rows]


def count_results(conn: sqlite3.Connection, user_id: str) -> dict[str, int]:
    """Total and defective result counts for a user."""
    row = conn.execute(
        """
        SELECT COUNT(*) AS total, COALESCE(SUM(defect_detected), 0) AS defective
        FROM defect_results
        WHERE user_id = ?
        """,
        (user_id,),
    ).fetchone()
    return {"total": int(row["total"]), "defective": int(row["defective"])}


def _hydrate(row: sqlite3.Row) -> DefectResult:
    return DefectResult(
        id=row["id"],
        user_id=row["user_id"],
        metrics=json.loads(row["metrics"]),
        defect_detected=bool(row["defect_detected"]),
        reason=row["reason"],
        created_at=row["created_at"],
    )
