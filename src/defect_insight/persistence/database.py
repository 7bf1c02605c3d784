"""SQLite-backed results database, one file per data directory."""

import sqlite3
from pathlib import Path
from typing import Optional, Union

from ..logging_config import get_logger

logger = get_logger(__name__)

# Current schema version (bump when tables change).
_SCHEMA_VERSION = 1


class ResultsDB:
    """Manages the ``results.db`` SQLite database.

    Usage::

        with ResultsDB(config.db_path) as db:
            save_result(db.conn, "alice", metrics, verdict)
    """

    def __init__(self, db_path: Union[str, Path]) -> None:
        self.db_path: Path = Path(db_path)
        self.db_dir: Path = self.db_path.parent
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def conn(self) -> sqlite3.Connection:
        """Return the active connection. Raises if not connected."""
        if self._conn is None:
            raise RuntimeError("ResultsDB is not connected. Use as context manager or call connect().")
        return self._conn

    # ── lifecycle ─────────────────────────────────────────────────

    def _ensure_dir(self) -> None:
        """Create the data directory and a .gitignore so it stays untracked."""
        self.db_dir.mkdir(parents=True, exist_ok=True)
        gitignore = self.db_dir / ".gitignore"
        if not gitignore.exists():
            gitignore.write_text("*\n")

    def connect(self) -> sqlite3.Connection:
        """Open (or create) the database and run migrations."""
        self._ensure_dir()
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        conn.row_factory = sqlite3.Row
        self._conn = conn
        self._migrate()
        logger.debug("Results DB connected at %s", self.db_path)
        return conn

    def close(self) -> None:
        """Close the connection if open."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "ResultsDB":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ── migration ─────────────────────────────────────────────────

    def _migrate(self) -> None:
        """Idempotently create all tables."""
        c = self.conn

        c.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER NOT NULL
            )
            """
        )

        row = c.execute("SELECT version FROM schema_version").fetchone()
        if row is None:
            c.execute(
                "INSERT INTO schema_version (version) VALUES (?)",
                (_SCHEMA_VERSION,),
            )

        # ── defect_results ───────────────────────────────────────
        c.execute(
            """
            CREATE TABLE IF NOT EXISTS defect_results (
                id              TEXT    PRIMARY KEY,
                user_id         TEXT    NOT NULL,
                metrics         TEXT    NOT NULL,
                defect_detected INTEGER NOT NULL,
                reason          TEXT,
                created_at      TEXT    NOT NULL
            )
            """
        )

        c.execute(
            "CREATE INDEX IF NOT EXISTS idx_defect_results_user "
            "ON defect_results(user_id, created_at)"
        )

        c.commit()
