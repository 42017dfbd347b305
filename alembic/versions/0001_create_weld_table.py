"""create weld table"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_create_weld"
down_revision = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    op.create_table(
        "weld",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("object_name", sa.String(), nullable=True),
        sa.Column("contractor", sa.String(), nullable=True),
        sa.Column("customer", sa.String(), nullable=True),
        sa.Column("weld_number", sa.String(), nullable=False),
        sa.Column("diameter", sa.Float, nullable=False),
        sa.Column("thickness1", sa.Float, nullable=False),
        sa.Column("thickness2", sa.Float, nullable=True),
        sa.Column("quality_level", sa.String(length=1), nullable=False),
        sa.Column("weld_date", sa.String(length=10), nullable=True),
        sa.Column("welding_process", sa.String(length=16), nullable=False),
        sa.Column("weld_status", sa.String(length=16), nullable=True),
        sa.Column("test_methods", sa.JSON(), nullable=False),
        sa.Column("conclusion", sa.String(length=16), nullable=True),
        sa.Column("joint", sa.String(length=16), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_weld_object_name", "weld", ["object_name"])
    op.create_index("ix_weld_weld_number", "weld", ["weld_number"])
    op.create_index("ix_weld_created_at", "weld", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_weld_created_at", table_name="weld")
    op.drop_index("ix_weld_weld_number", table_name="weld")
    op.drop_index("ix_weld_object_name", table_name="weld")
    op.drop_table("weld")
