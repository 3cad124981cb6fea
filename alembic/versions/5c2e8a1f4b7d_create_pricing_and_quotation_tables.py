"""create pricing and quotation tables

Revision ID: 5c2e8a1f4b7d
Revises:
Create Date: 2026-03-14 10:02:41.118304

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c2e8a1f4b7d'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "pricings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("base", sa.JSON(), nullable=True),
        sa.Column("flooring", sa.JSON(), nullable=True),
        sa.Column("court_sizes", sa.JSON(), nullable=True),
        sa.Column("additional_features", sa.JSON(), nullable=True),
        sa.Column("lighting", sa.JSON(), nullable=True),
        sa.Column("roof", sa.JSON(), nullable=True),
        sa.Column("equipment", sa.JSON(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("category"),
    )
    op.create_index(op.f("ix_pricings_id"), "pricings", ["id"], unique=False)

    op.create_table(
        "quotations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("quotation_number", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("client_name", sa.String(), nullable=False),
        sa.Column("client_email", sa.String(), nullable=False),
        sa.Column("client_phone", sa.String(), nullable=False),
        sa.Column("client_address", sa.Text(), nullable=False),
        sa.Column("sport", sa.String(), nullable=False),
        sa.Column("construction_type", sa.String(), nullable=True),
        sa.Column("court_size", sa.String(), nullable=True),
        sa.Column("custom_area", sa.Float(), nullable=True),
        sa.Column("court_area", sa.Float(), nullable=False),
        sa.Column("project_json", sa.JSON(), nullable=False),
        sa.Column("requirements_json", sa.JSON(), nullable=False),
        sa.Column("base_cost", sa.Float(), nullable=False),
        sa.Column("flooring_cost", sa.Float(), nullable=False),
        sa.Column("equipment_cost", sa.Float(), nullable=True),
        sa.Column("drainage_cost", sa.Float(), nullable=True),
        sa.Column("fencing_cost", sa.Float(), nullable=True),
        sa.Column("lighting_cost", sa.Float(), nullable=True),
        sa.Column("shed_cost", sa.Float(), nullable=True),
        sa.Column("additional_cost", sa.Float(), nullable=True),
        sa.Column("total_cost", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_quotations_id"), "quotations", ["id"], unique=False)
    op.create_index(op.f("ix_quotations_quotation_number"), "quotations",
                    ["quotation_number"], unique=True)


def downgrade() -> None:
    op.drop_index(op.f("ix_quotations_quotation_number"), table_name="quotations")
    op.drop_index(op.f("ix_quotations_id"), table_name="quotations")
    op.drop_table("quotations")
    op.drop_index(op.f("ix_pricings_id"), table_name="pricings")
    op.drop_table("pricings")
