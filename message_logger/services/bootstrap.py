"""Bootstrap helper to ensure the debug log table exists for first-time runs."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Iterable


def _execute_statements(conn: sqlite3.Connection, statements: Iterable[str]) -> None:
    for stmt in statements:
        conn.execute(stmt)


def ensure_base_tables(db_path: Path) -> None:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    try:
        _execute_statements(
            conn,
            [
                """
                CREATE TABLE IF NOT EXISTS debug_log (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    debug_info TEXT NOT NULL,
                    sql_statements TEXT NOT NULL DEFAULT '',
                    complete_time TEXT NOT NULL,
                    variable_name TEXT,
                    variable_value TEXT
                )
                """,
                """
                CREATE INDEX IF NOT EXISTS idx_debug_log_complete_time
                ON debug_log(complete_time)
                """,
            ],
        )
        conn.commit()
    finally:
        conn.close()
