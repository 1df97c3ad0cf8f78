import json
import pathlib
import sys

import pytest

root = pathlib.Path(__file__).resolve().parents[1]
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

from message_logger import create_app
from message_logger.services.database import db as raw_db
from message_logger.services.router import ErrorRouter
from message_logger.services.sinks import BufferSink


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("MSGLOG_DB_PATH", str(tmp_path / "app.db"))
    monkeypatch.setenv("MSGLOG_SECRET_KEY", "test-secret")
    monkeypatch.setenv("MSGLOG_AUTO_MIGRATE", "0")
    # The hook is process-wide; tests install it explicitly where needed.
    monkeypatch.setenv("MSGLOG_INSTALL_HOOKS", "0")
    monkeypatch.delenv("MSGLOG_LOG_TO_CONSOLE", raising=False)
    app = create_app()
    app.config.update(TESTING=True)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def sink():
    return BufferSink()


@pytest.fixture
def router(sink):
    return ErrorRouter(sink=sink)


@pytest.fixture
def fetch_rows(app):
    def _fetch(sql="SELECT * FROM debug_log ORDER BY id"):
        conn = raw_db()
        try:
            return conn.execute(sql).fetchall()
        finally:
            conn.close()

    return _fetch


def _console_payload(output: str):
    """Decode the JSON argument of a single ``<script>console.log(...)</script>``."""
    prefix, suffix = "<script>console.log(", ");</script>"
    assert output.startswith(prefix), output
    assert output.endswith(suffix), output
    return json.loads(output[len(prefix) : -len(suffix)])


@pytest.fixture
def console_payload():
    return _console_payload


@pytest.fixture
def app_router(app):
    return app.extensions["message_logger"]
