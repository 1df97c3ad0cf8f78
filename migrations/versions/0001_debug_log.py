"""Create the append-only debug_log table."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_debug_log"
down_revision = None
branch_labels = None
depends_on = None


def _create_index_if_not_exists(name: str, table: str, columns: str) -> None:
    op.execute(f"CREATE INDEX IF NOT EXISTS {name} ON {table}({columns})")


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = set(inspector.get_table_names())

    if "debug_log" not in tables:
        op.create_table(
            "debug_log",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("debug_info", sa.Text(), nullable=False),
            sa.Column("sql_statements", sa.Text(), nullable=False, server_default=""),
            sa.Column("complete_time", sa.Text(), nullable=False),
            sa.Column("variable_name", sa.Text(), nullable=True),
            sa.Column("variable_value", sa.Text(), nullable=True),
        )

    _create_index_if_not_exists("idx_debug_log_complete_time", "debug_log", "complete_time")


def downgrade() -> None:
    op.execute("DROP INDEX IF EXISTS idx_debug_log_complete_time")
    op.drop_table("debug_log")
