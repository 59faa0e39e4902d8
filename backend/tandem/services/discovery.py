"""Discovery Service — recommendations and the friend list read path.

Invariants:
    - recommend never returns the actor, a friend, or a non-onboarded user
    - recommend re-applies the pure filter even though the directory pre-filters in SQL
    - list_friends reflects the friend set at call time (no cache)
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from tandem.core.connection_views import (
    PartnerProfile, filter_by_learning_language, filter_by_name, project_profile,
)
from tandem.core.domain_types import UserId
from tandem.core.errors import ErrorContext, NotFoundError
from tandem.core.recommendation_filter import excluded_ids, filter_recommendations
from tandem.core.repository_protocols import UserDirectory, UserLike
from tandem.infrastructure.user_directory import SqlUserDirectory

logger = logging.getLogger(__name__)


class DiscoveryService:
    """Read-only queries over the user directory."""

    def __init__(self, db: AsyncSession, directory: UserDirectory | None = None):
        self.db = db
        self.directory = directory or SqlUserDirectory(db)

    async def _require_actor(self, actor_id: UserId) -> UserLike:
        actor = await self.directory.find_by_id(actor_id)
        if actor is None:
            raise NotFoundError(
                "User", str(actor_id), ErrorContext(actor_id=str(actor_id)),
            )
        return actor

    async def recommend(self, actor_id: UserId) -> list[UserLike]:
        actor = await self._require_actor(actor_id)
        candidates = await self.directory.list_candidates(excluded_ids(actor))
        recommended = filter_recommendations(actor, candidates)
        logger.debug(
            f"{len(recommended)} recommendation(s)",
            extra={"actor_id": actor_id},
        )
        return recommended

    async def list_friends(
        self,
        actor_id: UserId,
        learning_language: str | None = None,
        name_query: str | None = None,
    ) -> list[PartnerProfile]:
        """Friends in formation order, narrowed by language and/or name."""
        await self._require_actor(actor_id)
        friends = await self.directory.list_friend_profiles(actor_id)
        profiles = [project_profile(f) for f in friends]
        profiles = filter_by_learning_language(profiles, learning_language)
        return filter_by_name(profiles, name_query)
