"""Append-only debug log table."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import sqlalchemy as sa

from message_logger.services.database import session_scope

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _serialize_value(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        if isinstance(value, (set, frozenset)):
            value = sorted(value, key=repr)
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


@dataclass(frozen=True)
class DebugRecord:
    note: str
    sql_text: str
    variable_name: str | None = None
    variable_value: str | None = None
    timestamp: str = field(default_factory=lambda: datetime.now().strftime(TIMESTAMP_FORMAT))

    @classmethod
    def build(
        cls,
        debug_info: str,
        sql_statements: str = "",
        variable_name: str | None = None,
        variable_value: Any = None,
    ) -> "DebugRecord":
        return cls(
            note=debug_info,
            sql_text=sql_statements or "",
            variable_name=variable_name,
            variable_value=_serialize_value(variable_value),
        )


def write_record(record: DebugRecord) -> None:
    with session_scope() as session:
        session.execute(
            sa.text(
                """
                INSERT INTO debug_log(debug_info, sql_statements, complete_time, variable_name, variable_value)
                VALUES (:debug_info, :sql_statements, :complete_time, :variable_name, :variable_value)
                """
            ),
            {
                "debug_info": record.note,
                "sql_statements": record.sql_text,
                "complete_time": record.timestamp,
                "variable_name": record.variable_name,
                "variable_value": record.variable_value,
            },
        )


def insert_debug_log(
    debug_info: str,
    sql_statements: str = "",
    variable_name: str | None = None,
    variable_value: Any = None,
) -> DebugRecord:
    """Store one debug entry; collections in ``variable_value`` are stored as JSON."""
    record = DebugRecord.build(debug_info, sql_statements, variable_name, variable_value)
    write_record(record)
    return record
