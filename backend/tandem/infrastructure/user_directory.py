"""SQL User Directory — UserDirectory protocol backed by users + user_friends.

Invariants:
    - add_to_friend_set is idempotent: an existing edge is left untouched
    - Reads refresh objects already in the session (populate_existing), so a
      friend set read after add_to_friend_set in the same session is current
    - Never commits; the calling service owns the transaction

Design Decisions:
    - Check-then-add over dialect-specific ON CONFLICT: portable across
      PostgreSQL and SQLite; the composite primary key still rejects a racing
      duplicate, which surfaces as ConflictError at commit
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tandem.core.domain_types import UserId
from tandem.models.friend_link import FriendLink
from tandem.models.user import User

logger = logging.getLogger(__name__)


class SqlUserDirectory:
    """UserDirectory implementation over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, user_id: UserId) -> User | None:
        result = await self.db.execute(
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def find_many(self, user_ids: set[UserId]) -> dict[UserId, User]:
        if not user_ids:
            return {}
        result = await self.db.execute(
            select(User).where(User.id.in_(list(user_ids))),
        )
        return {u.id: u for u in result.scalars().all()}

    async def add_to_friend_set(self, user_id: UserId, other_id: UserId) -> None:
        """Add other_id to user_id's friend set. No-op when already present."""
        existing = await self.db.get(FriendLink, (user_id, other_id))
        if existing is not None:
            logger.info(
                "Friend edge already present",
                extra={"actor_id": user_id, "target_id": other_id},
            )
            return
        self.db.add(FriendLink(user_id=user_id, friend_id=other_id))
        await self.db.flush()

    async def list_friend_profiles(self, user_id: UserId) -> list[User]:
        """Friends of user_id in the order the friendships were formed."""
        result = await self.db.execute(
            select(User)
            .join(FriendLink, FriendLink.friend_id == User.id)
            .where(FriendLink.user_id == user_id)
            .order_by(FriendLink.created_at, User.id),
        )
        return list(result.scalars().all())

    async def list_candidates(self, exclude_ids: set[UserId]) -> list[User]:
        """Onboarded users outside exclude_ids, in sign-up order."""
        query = select(User).where(User.is_onboarded.is_(True))
        if exclude_ids:
            query = query.where(User.id.not_in(list(exclude_ids)))
        result = await self.db.execute(
            query.order_by(User.created_at, User.id),
        )
        return list(result.scalars().all())
