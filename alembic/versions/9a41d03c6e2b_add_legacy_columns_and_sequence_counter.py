"""add legacy compatibility columns and sequence counter

Revision ID: 9a41d03c6e2b
Revises: 5c2e8a1f4b7d
Create Date: 2026-03-21 15:47:09.602217

Quotations now record both request shapes: gameType alongside sport,
roofCost alongside shedCost, and which shape the submission arrived in.
Numbering moves from counting rows to an atomic counter row, seeded with
the number of quotations already stored. Adds whatever is missing, so it
is safe on databases built by Base.metadata.create_all().
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '9a41d03c6e2b'
down_revision: Union[str, None] = '5c2e8a1f4b7d'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LEGACY_COLUMNS = [
    ("game_type", sa.String()),
    ("court_type", sa.String()),
    ("feature_shape", sa.String()),
    ("roof_cost", sa.Float()),
]


def _column_exists(table_name, column_name):
    """Check if a column already exists in the table."""
    bind = op.get_bind()
    insp = inspect(bind)
    columns = [c["name"] for c in insp.get_columns(table_name)]
    return column_name in columns


def _table_exists(table_name):
    """Check if a table exists."""
    bind = op.get_bind()
    insp = inspect(bind)
    return table_name in insp.get_table_names()


def upgrade() -> None:
    if _table_exists("quotations"):
        for col_name, col_type in LEGACY_COLUMNS:
            if not _column_exists("quotations", col_name):
                op.add_column("quotations", sa.Column(col_name, col_type, nullable=True))

        op.execute("UPDATE quotations SET game_type = sport WHERE game_type IS NULL")
        op.execute("UPDATE quotations SET roof_cost = shed_cost WHERE roof_cost IS NULL")
        op.execute("UPDATE quotations SET court_type = 'outdoor' WHERE court_type IS NULL")
        op.execute("UPDATE quotations SET feature_shape = 'current' WHERE feature_shape IS NULL")

    if not _table_exists("sequence_counters"):
        op.create_table(
            "sequence_counters",
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("value", sa.Integer(), nullable=False),
            sa.PrimaryKeyConstraint("name"),
        )
        op.execute(
            "INSERT INTO sequence_counters (name, value) "
            "SELECT 'quotation', COUNT(*) FROM quotations"
        )


def downgrade() -> None:
    if _table_exists("sequence_counters"):
        op.drop_table("sequence_counters")

    if _table_exists("quotations"):
        for col_name, _ in reversed(LEGACY_COLUMNS):
            if _column_exists("quotations", col_name):
                op.drop_column("quotations", col_name)
