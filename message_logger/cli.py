"""Flask CLI commands for migrations, debug log entries and console echo."""

from __future__ import annotations

import json

import click
from alembic import command
from flask import current_app
from flask.cli import AppGroup, with_appcontext

from message_logger.services.debug_log import insert_debug_log
from message_logger.services.migrations import alembic_config
from message_logger.services.sinks import StreamSink, console_log


def register_cli(app) -> None:
    db_group = AppGroup("db")

    @db_group.command("upgrade")
    @with_appcontext
    def upgrade() -> None:
        command.upgrade(alembic_config(current_app), "head")

    app.cli.add_command(db_group)

    debug_group = AppGroup("debug-log")

    @debug_group.command("insert")
    @click.option("--info", "debug_info", required=True, help="Message describing the debug point")
    @click.option("--sql", "sql_statements", default="", help="SQL executed at the time of logging")
    @click.option("--name", "variable_name", default=None, help="Name of the logged variable")
    @click.option("--value", "variable_value", default=None, help="Value of the logged variable")
    @with_appcontext
    def insert(debug_info: str, sql_statements: str, variable_name: str | None, variable_value: str | None) -> None:
        record = insert_debug_log(debug_info, sql_statements, variable_name, variable_value)
        click.echo(f"Debug entry stored at {record.timestamp}.")

    app.cli.add_command(debug_group)

    @app.cli.command("console-log")
    @click.argument("payload")
    @click.option("--json", "as_json", is_flag=True, default=False, help="Parse PAYLOAD as JSON first")
    @click.option("--no-script-tags", is_flag=True, default=False)
    def console_log_command(payload: str, as_json: bool, no_script_tags: bool) -> None:
        value = payload
        if as_json:
            try:
                value = json.loads(payload)
            except ValueError as exc:
                raise click.ClickException(f"PAYLOAD is not valid JSON: {exc}")
        console_log(StreamSink(), value, with_script_tags=not no_script_tags)
        click.echo()
