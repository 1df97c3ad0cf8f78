"""Message logger package exposing the Flask application factory."""

from __future__ import annotations

import os
from pathlib import Path

from flask import Flask

from .cli import register_cli
from .extensions import db, hook, init_extensions
from .services.bootstrap import ensure_base_tables
from .services.debug_log import DebugRecord, insert_debug_log
from .services.hooks import ErrorHook, Notice, UserNotice, trigger_error
from .services.migrations import auto_upgrade
from .services.router import ErrorEvent, ErrorRouter, RenderMode, SourceLocation
from .services.severity import ErrorCode, SeverityBucket, classify
from .services.sinks import BufferSink, StreamSink, console_log, render_inline

TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in TRUTHY


def _data_root(base_dir: Path, override: Path | None = None) -> Path:
    root = override if override else base_dir / "data"
    root.mkdir(parents=True, exist_ok=True)
    (root / "logs").mkdir(parents=True, exist_ok=True)
    return root


def create_app() -> Flask:
    resource_root = Path(__file__).resolve().parent.parent
    db_override = os.getenv("MSGLOG_DB_PATH")
    override_root = Path(db_override).parent if db_override else None
    data_root = _data_root(resource_root, override_root)
    db_path = Path(db_override) if db_override else data_root / "app.db"

    app = Flask(__name__)

    secret_key = os.getenv("MSGLOG_SECRET_KEY")
    if not secret_key:
        secret_key = os.urandom(32)

    app.config.update(
        SECRET_KEY=secret_key,
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{db_path}",
        SQLALCHEMY_ENGINE_OPTIONS={"connect_args": {"check_same_thread": False}},
        DATA_ROOT=str(data_root),
        MESSAGE_LOGGER_DB=str(db_path),
        MESSAGE_LOGGER_LOG_TO_CONSOLE=_env_flag("MSGLOG_LOG_TO_CONSOLE", "0"),
        MESSAGE_LOGGER_INSTALL_HOOKS=_env_flag("MSGLOG_INSTALL_HOOKS", "1"),
    )

    init_extensions(app)
    auto_upgrade(app)
    ensure_base_tables(Path(app.config["MESSAGE_LOGGER_DB"]))
    register_cli(app)

    return app


__all__ = [
    "BufferSink",
    "DebugRecord",
    "ErrorCode",
    "ErrorEvent",
    "ErrorHook",
    "ErrorRouter",
    "Notice",
    "RenderMode",
    "SeverityBucket",
    "SourceLocation",
    "StreamSink",
    "UserNotice",
    "classify",
    "console_log",
    "create_app",
    "db",
    "hook",
    "insert_debug_log",
    "render_inline",
    "trigger_error",
]
