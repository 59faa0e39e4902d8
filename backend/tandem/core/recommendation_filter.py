"""Recommendation Filter — "people you may know" as a flat exclusion filter.

Invariants:
    - Output never contains the actor, any member of the actor's friend set,
      or any user with is_onboarded == False
    - Input order is preserved (no ranking, no scoring)
    - Empty input or no eligible candidate yields [] (never an error)
"""

from collections.abc import Iterable

from tandem.core.domain_types import UserId
from tandem.core.repository_protocols import UserLike


def excluded_ids(actor: UserLike) -> set[UserId]:
    """Ids that can never be recommended to the actor."""
    return {actor.id, *actor.friend_ids}


def is_recommendable(candidate: UserLike, excluded: set[UserId]) -> bool:
    return candidate.is_onboarded and candidate.id not in excluded


def filter_recommendations(
    actor: UserLike, candidates: Iterable[UserLike],
) -> list[UserLike]:
    """Apply the exclusion rules to the directory's candidate pool."""
    excluded = excluded_ids(actor)
    return [c for c in candidates if is_recommendable(c, excluded)]
