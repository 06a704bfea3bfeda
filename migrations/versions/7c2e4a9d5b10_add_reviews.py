"""add reviews

Revision ID: 7c2e4a9d5b10
Revises: 3b1f0c2d9a41
Create Date: 2026-10-18 09:41:27.118305

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "7c2e4a9d5b10"
down_revision: Union[str, Sequence[str], None] = "3b1f0c2d9a41"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the review table, the profile rating and the review preference."""
    op.create_table(
        "review",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("author_id", sa.String(length=64), nullable=False),
        sa.Column("target_user_id", sa.String(length=64), nullable=False),
        sa.Column("trade_id", sa.String(length=36), nullable=True),
        sa.Column("listing_id", sa.String(length=36), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("author_id <> target_user_id", name="ck_review_not_self"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating_range"),
        sa.ForeignKeyConstraint(["author_id"], ["profile.id"]),
        sa.ForeignKeyConstraint(["target_user_id"], ["profile.id"]),
        sa.ForeignKeyConstraint(["trade_id"], ["trade.id"]),
        sa.ForeignKeyConstraint(["listing_id"], ["listing.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_review_author_id", "review", ["author_id"])
    op.create_index("ix_review_target_user_id", "review", ["target_user_id"])

    with op.batch_alter_table("profile") as batch_op:
        batch_op.add_column(
            sa.Column("rating", sa.Float(), nullable=False, server_default="5.0")
        )
    with op.batch_alter_table("notification_preference") as batch_op:
        batch_op.add_column(
            sa.Column("reviews", sa.Boolean(), nullable=False, server_default=sa.true())
        )


def downgrade() -> None:
    """Drop the review table and its profile and preference columns."""
    with op.batch_alter_table("notification_preference") as batch_op:
        batch_op.drop_column("reviews")
    with op.batch_alter_table("profile") as batch_op:
        batch_op.drop_column("rating")
    op.drop_index("ix_review_target_user_id", table_name="review")
    op.drop_index("ix_review_author_id", table_name="review")
    op.drop_table("review")
