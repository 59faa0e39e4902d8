"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, RequestId wrap UUIDs — never use bare UUID in domain logic
    - RequestStatus is monotonic: PENDING -> ACCEPTED, never back
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - No DECLINED/CANCELLED member: the lifecycle only ever moves forward to ACCEPTED
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
RequestId = NewType("RequestId", UUID)

# Canonical (sorted) form of an unordered pair of users
UserPair = tuple[UserId, UserId]


# ─── Enums ───────────────────────────────────────────────────────

class RequestStatus(str, Enum):
    """Connection request lifecycle states — maps to DB `status` column."""
    PENDING = "pending"
    ACCEPTED = "accepted"


class CounterpartyRole(str, Enum):
    """Which side of an accepted request the actor was on."""
    SENDER = "sender"
    RECIPIENT = "recipient"
