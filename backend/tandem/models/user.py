"""User ORM — directory entry for a language learner.

Invariants:
    - id is UUID primary key
    - email is unique
    - is_onboarded gates recommendation eligibility
    - friend_ids mirrors the user's rows in user_friends (outgoing edges only)

Design Decisions:
    - Friend set as its own table (FriendLink) instead of an array column: the
      composite primary key gives set semantics for free
    - friend_links loaded with selectin: async sessions cannot lazy-load
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from tandem.db.base import Base


class User(Base):
    """Language learner profile plus friend set."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    full_name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(
        String(254), nullable=False, unique=True,
    )
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    profile_pic: Mapped[str | None] = mapped_column(
        String(500), nullable=True,
    )
    native_language: Mapped[str | None] = mapped_column(
        String(50), nullable=True,
    )
    learning_language: Mapped[str | None] = mapped_column(
        String(50), nullable=True,
    )
    location: Mapped[str | None] = mapped_column(String(120), nullable=True)
    is_onboarded: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    friend_links: Mapped[list["FriendLink"]] = relationship(
        "FriendLink",
        foreign_keys="FriendLink.user_id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def friend_ids(self) -> frozenset[uuid.UUID]:
        return frozenset(link.friend_id for link in self.friend_links)
