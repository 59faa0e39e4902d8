"""FriendLink ORM — one directed edge of the symmetric friend graph.

Invariants:
    - (user_id, friend_id) is the primary key: an edge exists at most once
    - user_id != friend_id
    - Edges are written in pairs by acceptance (A->B and B->A in one commit)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from tandem.db.base import Base


class FriendLink(Base):
    """Directed friend edge; the reverse edge is always written alongside."""
    __tablename__ = "user_friends"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    friend_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint("user_id <> friend_id", name="ck_user_friends_not_self"),
    )
