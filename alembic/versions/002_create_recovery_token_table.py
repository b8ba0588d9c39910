"""Create recovery token table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "recovery_token",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("token", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_recovery_token_token"), "recovery_token", ["token"], unique=True)
    op.create_index(op.f("ix_recovery_token_user_id"), "recovery_token", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_recovery_token_user_id"), table_name="recovery_token")
    op.drop_index(op.f("ix_recovery_token_token"), table_name="recovery_token")
    op.drop_table("recovery_token")
