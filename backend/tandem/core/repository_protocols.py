"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - add_to_friend_set is idempotent (set semantics, no duplicate edges)
    - Store methods flush but never commit — the calling service owns the unit of work

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these protocols are never async themselves —
      the shell orchestrates the async calls around the pure logic
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from tandem.core.domain_types import RequestId, RequestStatus, UserId, UserPair


class UserLike(Protocol):
    """Structural contract for users handed out by the directory.

    Avoids coupling core rules to the ORM model while giving mypy
    real type information (unlike Any).
    """
    id: UserId
    full_name: str
    profile_pic: str | None
    native_language: str | None
    learning_language: str | None
    is_onboarded: bool

    @property
    def friend_ids(self) -> frozenset[UserId]: ...


class ConnectionRequestLike(Protocol):
    """Structural contract for persisted connection requests."""
    id: RequestId
    sender_id: UserId
    recipient_id: UserId
    status: str
    created_at: datetime
    accepted_at: datetime | None


@dataclass(frozen=True)
class ConnectionRequestDraft:
    """A request validated by core rules, not yet persisted."""
    sender_id: UserId
    recipient_id: UserId
    pair: UserPair
    status: RequestStatus = RequestStatus.PENDING


class UserDirectory(Protocol):
    """Contract for user lookup and friend-set mutation — implemented by shell."""
    async def find_by_id(self, user_id: UserId) -> UserLike | None: ...
    async def find_many(self, user_ids: set[UserId]) -> dict[UserId, UserLike]: ...
    async def add_to_friend_set(self, user_id: UserId, other_id: UserId) -> None: ...
    async def list_friend_profiles(self, user_id: UserId) -> list[UserLike]: ...
    async def list_candidates(
        self, exclude_ids: set[UserId],
    ) -> list[UserLike]: ...


class ConnectionRequestStore(Protocol):
    """Contract for connection request persistence — implemented by shell."""
    async def find_by_id(
        self, request_id: RequestId,
    ) -> ConnectionRequestLike | None: ...
    async def find_by_unordered_pair(
        self, a: UserId, b: UserId,
    ) -> ConnectionRequestLike | None: ...
    async def find_by_recipient_and_status(
        self, user_id: UserId, status: RequestStatus,
    ) -> list[ConnectionRequestLike]: ...
    async def find_by_sender_and_status(
        self, user_id: UserId, status: RequestStatus,
    ) -> list[ConnectionRequestLike]: ...
    async def insert(
        self, draft: ConnectionRequestDraft,
    ) -> ConnectionRequestLike: ...
    async def update_status(
        self, request_id: RequestId, status: RequestStatus,
    ) -> None: ...
