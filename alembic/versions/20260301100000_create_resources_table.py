"""Create resources table with soft-delete marker.

Revision ID: 20260301100000
Revises: 20260301000000
Create Date: 2026-03-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20260301100000"
down_revision: Union[str, None] = "20260301000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "resources",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("uuid", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", sa.String(length=32), nullable=False, server_default="other"),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="pending"),
        sa.Column("priority", sa.String(length=32), nullable=False, server_default="medium"),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("assigned_to", sa.Integer(), nullable=True),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["assigned_to"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "type IN ('project', 'task', 'inventory', 'document', 'other')",
            name="ck_resources_type",
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'in_progress', 'completed', 'cancelled')",
            name="ck_resources_status",
        ),
        sa.CheckConstraint(
            "priority IN ('low', 'medium', 'high', 'urgent')",
            name="ck_resources_priority",
        ),
    )
    op.create_index(op.f("ix_resources_uuid"), "resources", ["uuid"], unique=True)
    op.create_index(op.f("ix_resources_user_id"), "resources", ["user_id"], unique=False)
    op.create_index(op.f("ix_resources_assigned_to"), "resources", ["assigned_to"], unique=False)
    op.create_index(op.f("ix_resources_due_date"), "resources", ["due_date"], unique=False)
    op.create_index("ix_resources_status_priority", "resources", ["status", "priority"])
    op.create_index("ix_resources_type_status", "resources", ["type", "status"])


def downgrade() -> None:
    op.drop_index("ix_resources_type_status", table_name="resources")
    op.drop_index("ix_resources_status_priority", table_name="resources")
    op.drop_index(op.f("ix_resources_due_date"), table_name="resources")
    op.drop_index(op.f("ix_resources_assigned_to"), table_name="resources")
    op.drop_index(op.f("ix_resources_user_id"), table_name="resources")
    op.drop_index(op.f("ix_resources_uuid"), table_name="resources")
    op.drop_table("resources")
