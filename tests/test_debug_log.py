import re

import pytest
import sqlalchemy as sa

from message_logger.services.debug_log import TIMESTAMP_FORMAT, DebugRecord, insert_debug_log, write_record


def test_insert_debug_log_persists_row(app, fetch_rows):
    with app.app_context():
        record = insert_debug_log("after update", "UPDATE t SET a = 1", "ids", [1, 2, 3])
    rows = fetch_rows()
    assert len(rows) == 1
    row = rows[0]
    assert row["debug_info"] == "after update"
    assert row["sql_statements"] == "UPDATE t SET a = 1"
    assert row["variable_name"] == "ids"
    assert row["variable_value"] == "[1, 2, 3]"
    assert row["complete_time"] == record.timestamp
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", row["complete_time"])


def test_optional_fields_are_null(app, fetch_rows):
    with app.app_context():
        insert_debug_log("checkpoint", "")
    row = fetch_rows()[0]
    assert row["variable_name"] is None
    assert row["variable_value"] is None


def test_quotes_are_bound_not_interpolated(app, fetch_rows):
    tricky = "O'Brien'); DROP TABLE debug_log; --"
    with app.app_context():
        insert_debug_log(tricky, "SELECT '1'", "name", tricky)
    row = fetch_rows()[0]
    assert row["debug_info"] == tricky
    assert row["variable_value"] == tricky


def test_inserts_are_append_only(app, fetch_rows):
    with app.app_context():
        insert_debug_log("one", "")
        insert_debug_log("two", "")
    assert [row["debug_info"] for row in fetch_rows()] == ["one", "two"]


def test_record_serializes_collections():
    assert DebugRecord.build("x", variable_value={"a": [1, "b"]}).variable_value == '{"a": [1, "b"]}'
    assert DebugRecord.build("x", variable_value=("a", 2)).variable_value == '["a", 2]'
    assert DebugRecord.build("x", variable_value={3, 1, 2}).variable_value == "[1, 2, 3]"
    assert DebugRecord.build("x", variable_value=5).variable_value == "5"
    assert DebugRecord.build("x", variable_value="already text").variable_value == "already text"


def test_record_timestamp_format():
    record = DebugRecord.build("x")
    assert len(record.timestamp) == len("2024-01-01 00:00:00")
    assert TIMESTAMP_FORMAT == "%Y-%m-%d %H:%M:%S"
    assert record.sql_text == ""


def test_failed_insert_rolls_back_and_session_recovers(app, fetch_rows):
    with app.app_context():
        with pytest.raises(sa.exc.IntegrityError):
            write_record(DebugRecord(note=None, sql_text=""))
        insert_debug_log("after failure", "")
    assert [row["debug_info"] for row in fetch_rows()] == ["after failure"]
