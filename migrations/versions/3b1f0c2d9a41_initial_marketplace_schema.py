"""initial marketplace schema

Revision ID: 3b1f0c2d9a41
Revises:
Create Date: 2026-09-14 10:02:11.481233

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3b1f0c2d9a41"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles, listings, trades, ledger, messaging and notification tables."""
    op.create_table(
        "profile",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("username", sa.String(length=32), nullable=False),
        sa.Column("display_name", sa.String(length=64), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("coin_balance", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("coin_balance >= 0", name="ck_profile_coin_balance_non_negative"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_table(
        "listing",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("owner_id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=64), nullable=False),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("is_service", sa.Boolean(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('ACTIVE', 'ARCHIVED', 'DELETED')", name="ck_listing_status"
        ),
        sa.CheckConstraint("price >= 0", name="ck_listing_price_non_negative"),
        sa.ForeignKeyConstraint(["owner_id"], ["profile.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_listing_owner_id", "listing", ["owner_id"])
    op.create_index("ix_listing_category", "listing", ["category"])
    op.create_index("ix_listing_status_created_at", "listing", ["status", "created_at"])

    op.create_table(
        "trade",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("initiator_id", sa.String(length=64), nullable=False),
        sa.Column("responder_id", sa.String(length=64), nullable=False),
        sa.Column("listing_id", sa.String(length=36), nullable=False),
        sa.Column("proposed_listing_id", sa.String(length=36), nullable=True),
        sa.Column("coin_amount", sa.Integer(), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("initiator_id <> responder_id", name="ck_trade_distinct_parties"),
        sa.CheckConstraint("coin_amount >= 0", name="ck_trade_coin_amount_non_negative"),
        sa.CheckConstraint(
            "status IN ('PENDING', 'ACCEPTED', 'REJECTED', 'CANCELLED', 'COMPLETED')",
            name="ck_trade_status",
        ),
        sa.ForeignKeyConstraint(["initiator_id"], ["profile.id"]),
        sa.ForeignKeyConstraint(["responder_id"], ["profile.id"]),
        sa.ForeignKeyConstraint(["listing_id"], ["listing.id"]),
        sa.ForeignKeyConstraint(["proposed_listing_id"], ["listing.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_trade_initiator_id", "trade", ["initiator_id"])
    op.create_index("ix_trade_responder_id", "trade", ["responder_id"])
    op.create_index("ix_trade_listing_id", "trade", ["listing_id"])

    op.create_table(
        "coin_transaction",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["profile.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_coin_transaction_user_created", "coin_transaction", ["user_id", "created_at"]
    )

    op.create_table(
        "message",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("sender_id", sa.String(length=64), nullable=False),
        sa.Column("receiver_id", sa.String(length=64), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["sender_id"], ["profile.id"]),
        sa.ForeignKeyConstraint(["receiver_id"], ["profile.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_message_pair_created", "message", ["sender_id", "receiver_id", "created_at"]
    )

    op.create_table(
        "conversation",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("other_user_id", sa.String(length=64), nullable=False),
        sa.Column("last_message", sa.Text(), nullable=True),
        sa.Column("last_message_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["profile.id"]),
        sa.ForeignKeyConstraint(["other_user_id"], ["profile.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "other_user_id", name="uq_conversation_pair"),
    )
    op.create_index("ix_conversation_user_id", "conversation", ["user_id"])

    op.create_table(
        "notification",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("related_id", sa.String(length=36), nullable=True),
        sa.Column("related_type", sa.String(length=32), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["profile.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notification_user_read", "notification", ["user_id", "is_read"])

    op.create_table(
        "notification_preference",
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("in_app_enabled", sa.Boolean(), nullable=False),
        sa.Column("trade_updates", sa.Boolean(), nullable=False),
        sa.Column("messages", sa.Boolean(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["profile.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )


def downgrade() -> None:
    """Drop every marketplace table."""
    op.drop_table("notification_preference")
    op.drop_index("ix_notification_user_read", table_name="notification")
    op.drop_table("notification")
    op.drop_index("ix_conversation_user_id", table_name="conversation")
    op.drop_table("conversation")
    op.drop_index("ix_message_pair_created", table_name="message")
    op.drop_table("message")
    op.drop_index("ix_coin_transaction_user_created", table_name="coin_transaction")
    op.drop_table("coin_transaction")
    op.drop_index("ix_trade_listing_id", table_name="trade")
    op.drop_index("ix_trade_responder_id", table_name="trade")
    op.drop_index("ix_trade_initiator_id", table_name="trade")
    op.drop_table("trade")
    op.drop_index("ix_listing_status_created_at", table_name="listing")
    op.drop_index("ix_listing_category", table_name="listing")
    op.drop_index("ix_listing_owner_id", table_name="listing")
    op.drop_table("listing")
    op.drop_table("profile")
