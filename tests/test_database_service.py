import importlib

from message_logger.services.database import db, session_scope


def test_database_service_imports():
    m = importlib.import_module("message_logger.services.database")
    assert hasattr(m, "db")


def test_sqlite_pragmas_active(app):
    conn = db()
    try:
        mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
        timeout = conn.execute("PRAGMA busy_timeout").fetchone()[0]
    finally:
        conn.close()
    assert mode.lower() == "wal"
    assert timeout == 5000


def test_debug_table_bootstrapped(app, fetch_rows):
    names = [row[0] for row in fetch_rows("SELECT name FROM sqlite_master WHERE type='table'")]
    assert "debug_log" in names


def test_session_scope_rolls_back_on_error(app, fetch_rows):
    import sqlalchemy as sa

    try:
        with session_scope() as session:
            session.execute(
                sa.text(
                    "INSERT INTO debug_log(debug_info, sql_statements, complete_time) VALUES ('lost', '', 'now')"
                )
            )
            raise RuntimeError("abort")
    except RuntimeError:
        pass
    assert fetch_rows() == []
