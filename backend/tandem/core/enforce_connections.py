"""Connection Rule Enforcement — validates every request transition before IO commits it.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Raise a TandemError subclass on violation, return None on success
    - validate_send_prerequisites chains all send checks — first error wins
    - Self check runs before any lookup result is consulted
    - canonical_pair(a, b) == canonical_pair(b, a) for all a, b

Design Decisions:
    - Raise (not return dicts): callers are HTTP routes, and the global handler
      already maps TandemError to the REST envelope
    - Duplicate detection keyed on the sorted pair so the store can back it with
      a single UNIQUE constraint instead of two directional queries
"""

from tandem.core.domain_types import RequestStatus, UserId, UserPair
from tandem.core.errors import (
    AlreadyFriendsError, DuplicateRequestError, ErrorContext,
    ForbiddenError, SelfRequestError,
)
from tandem.core.repository_protocols import (
    ConnectionRequestDraft, ConnectionRequestLike, UserLike,
)


def canonical_pair(a: UserId, b: UserId) -> UserPair:
    """Order-independent key for a pair of users."""
    return (a, b) if a <= b else (b, a)


def _send_context(actor_id: UserId, target_id: UserId) -> ErrorContext:
    return ErrorContext(actor_id=str(actor_id), target_id=str(target_id))


def check_not_self(actor_id: UserId, target_id: UserId) -> None:
    """Rule 1: nobody can send a request to themselves."""
    if actor_id == target_id:
        raise SelfRequestError(_send_context(actor_id, target_id))


def check_not_already_friends(actor_id: UserId, target: UserLike) -> None:
    """Rule 2: no request between users who are already friends."""
    if actor_id in target.friend_ids:
        raise AlreadyFriendsError(_send_context(actor_id, target.id))


def check_no_existing_request(
    actor_id: UserId, target_id: UserId,
    existing: ConnectionRequestLike | None,
) -> None:
    """Rule 3: one request per unordered pair, whatever its status or direction."""
    if existing is not None:
        ctx = _send_context(actor_id, target_id)
        ctx.request_id = str(existing.id)
        raise DuplicateRequestError(ctx)


def validate_send_prerequisites(
    actor_id: UserId, target: UserLike,
    existing: ConnectionRequestLike | None,
) -> ConnectionRequestDraft:
    """Chain all send checks. Returns the draft to persist."""
    check_not_self(actor_id, target.id)
    check_not_already_friends(actor_id, target)
    check_no_existing_request(actor_id, target.id, existing)
    return ConnectionRequestDraft(
        sender_id=actor_id,
        recipient_id=target.id,
        pair=canonical_pair(actor_id, target.id),
    )


def check_can_accept(actor_id: UserId, request: ConnectionRequestLike) -> None:
    """Rule 4: only the recipient may accept. The sender cannot self-accept."""
    if actor_id != request.recipient_id:
        raise ForbiddenError(
            "You are not authorized to accept this request",
            ErrorContext(actor_id=str(actor_id), request_id=str(request.id)),
        )


def is_reaccept(request: ConnectionRequestLike) -> bool:
    """True when the request was already accepted (idempotent re-accept)."""
    return RequestStatus(request.status) == RequestStatus.ACCEPTED
