"""Initial schema — users, user_friends, connection_requests.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("full_name", sa.String(120), nullable=False),
        sa.Column("email", sa.String(254), nullable=False, unique=True),
        sa.Column("bio", sa.Text, nullable=False, server_default=""),
        sa.Column("profile_pic", sa.String(500), nullable=True),
        sa.Column("native_language", sa.String(50), nullable=True),
        sa.Column("learning_language", sa.String(50), nullable=True),
        sa.Column("location", sa.String(120), nullable=True),
        sa.Column("is_onboarded", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "user_friends",
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("friend_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("user_id <> friend_id", name="ck_user_friends_not_self"),
    )

    op.create_table(
        "connection_requests",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("sender_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("recipient_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("pair_low", UUID(as_uuid=True), nullable=False),
        sa.Column("pair_high", UUID(as_uuid=True), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("pair_low", "pair_high", name="uq_connection_requests_pair"),
        sa.CheckConstraint("sender_id <> recipient_id", name="ck_connection_requests_not_self"),
    )
    op.create_index(
        "ix_connection_requests_recipient_status",
        "connection_requests", ["recipient_id", "status"],
    )
    op.create_index(
        "ix_connection_requests_sender_status",
        "connection_requests", ["sender_id", "status"],
    )


def downgrade() -> None:
    op.drop_index("ix_connection_requests_sender_status", table_name="connection_requests")
    op.drop_index("ix_connection_requests_recipient_status", table_name="connection_requests")
    op.drop_table("connection_requests")
    op.drop_table("user_friends")
    op.drop_table("users")
