"""In-memory stand-ins for UserLike / ConnectionRequestLike used by pure core tests."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from tandem.core.domain_types import RequestStatus


@dataclass
class FakeUser:
    id: UUID = field(default_factory=uuid4)
    full_name: str = "Ana"
    profile_pic: str | None = "https://avatar.example.com/ana.png"
    native_language: str | None = "portuguese"
    learning_language: str | None = "english"
    is_onboarded: bool = True
    friends: set = field(default_factory=set)

    @property
    def friend_ids(self) -> frozenset:
        return frozenset(self.friends)


@dataclass
class FakeRequest:
    sender_id: UUID
    recipient_id: UUID
    status: str = RequestStatus.PENDING.value
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    accepted_at: datetime | None = None


def befriend(a: FakeUser, b: FakeUser) -> None:
    a.friends.add(b.id)
    b.friends.add(a.id)
