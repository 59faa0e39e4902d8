"""ConnectionRequest ORM — persists a directional friend request.

Invariants:
    - sender_id != recipient_id (CHECK constraint)
    - (pair_low, pair_high) is UNIQUE: one record per unordered pair, any status
    - pair_low/pair_high are the sorted (sender_id, recipient_id)
    - status transitions: pending -> accepted (never back, never deleted)

Design Decisions:
    - Canonical pair columns over two directional lookups: lets the database
      reject the losing insert of two concurrent sends for the same pair
    - (recipient_id, status) and (sender_id, status) indexed: every list query
      filters on one of them
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, ForeignKey, Index, String, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from tandem.db.base import Base


class ConnectionRequest(Base):
    """Friend request from sender to recipient."""
    __tablename__ = "connection_requests"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    sender_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    recipient_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    pair_low: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False,
    )
    pair_high: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    accepted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    __table_args__ = (
        UniqueConstraint(
            "pair_low", "pair_high", name="uq_connection_requests_pair",
        ),
        CheckConstraint(
            "sender_id <> recipient_id",
            name="ck_connection_requests_not_self",
        ),
        Index(
            "ix_connection_requests_recipient_status",
            "recipient_id", "status",
        ),
        Index(
            "ix_connection_requests_sender_status", "sender_id", "status",
        ),
    )
