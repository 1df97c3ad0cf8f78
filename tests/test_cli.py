def test_debug_log_insert_command(runner, fetch_rows):
    result = runner.invoke(
        args=["debug-log", "insert", "--info", "from cli", "--sql", "SELECT 1", "--name", "n", "--value", "v"]
    )
    assert result.exit_code == 0, result.output
    assert "Debug entry stored" in result.output
    row = fetch_rows()[0]
    assert (row["debug_info"], row["sql_statements"], row["variable_name"], row["variable_value"]) == (
        "from cli",
        "SELECT 1",
        "n",
        "v",
    )


def test_console_log_command_escapes_json(runner):
    result = runner.invoke(args=["console-log", "--json", '{"a": "<b>"}'])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == '<script>console.log({"a": "\\u003cb\\u003e"});</script>'


def test_console_log_command_without_script_tags(runner):
    result = runner.invoke(args=["console-log", "--no-script-tags", "hello"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == 'console.log("hello");'


def test_console_log_command_rejects_bad_json(runner):
    result = runner.invoke(args=["console-log", "--json", "{nope"])
    assert result.exit_code != 0
    assert "not valid JSON" in result.output


def test_db_upgrade_stamps_revision(runner, fetch_rows):
    result = runner.invoke(args=["db", "upgrade"])
    assert result.exit_code == 0, result.output
    assert [row[0] for row in fetch_rows("SELECT version_num FROM alembic_version")] == ["0001_debug_log"]
