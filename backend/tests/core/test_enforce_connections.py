"""Connection Rule Enforcement — tests for pure send/accept validation.

Tests cover:
    - canonical_pair is order-independent
    - self request rejected before anything else
    - already-friends guard
    - duplicate pair rejected in either direction and any status
    - validate_send_prerequisites returns a pending draft with the sorted pair
    - only the recipient may accept
"""

import pytest
from uuid import uuid4

from tandem.core.domain_types import RequestStatus
from tandem.core.enforce_connections import (
    canonical_pair,
    check_can_accept,
    check_no_existing_request,
    check_not_already_friends,
    check_not_self,
    is_reaccept,
    validate_send_prerequisites,
)
from tandem.core.errors import (
    AlreadyFriendsError, DuplicateRequestError, ForbiddenError, SelfRequestError,
)
from tests.core.fakes import FakeRequest, FakeUser, befriend


# ─── canonical_pair ──────────────────────────────────────────────

def test_canonical_pair_is_order_independent():
    a, b = uuid4(), uuid4()
    assert canonical_pair(a, b) == canonical_pair(b, a)


def test_canonical_pair_is_sorted():
    a, b = uuid4(), uuid4()
    low, high = canonical_pair(a, b)
    assert low <= high
    assert {low, high} == {a, b}


# ─── send checks ─────────────────────────────────────────────────

def test_self_request_rejected():
    me = uuid4()
    with pytest.raises(SelfRequestError) as exc:
        check_not_self(me, me)
    assert exc.value.code == "SELF_REQUEST"
    assert exc.value.http_status == 400


def test_different_users_pass_self_check():
    assert check_not_self(uuid4(), uuid4()) is None


def test_already_friends_rejected():
    actor, target = FakeUser(), FakeUser()
    befriend(actor, target)
    with pytest.raises(AlreadyFriendsError):
        check_not_already_friends(actor.id, target)


def test_strangers_pass_friend_check():
    assert check_not_already_friends(uuid4(), FakeUser()) is None


def test_existing_request_rejected_same_direction():
    a, b = uuid4(), uuid4()
    with pytest.raises(DuplicateRequestError) as exc:
        check_no_existing_request(a, b, FakeRequest(sender_id=a, recipient_id=b))
    assert exc.value.code == "DUPLICATE_REQUEST"


def test_existing_request_rejected_reverse_direction():
    a, b = uuid4(), uuid4()
    with pytest.raises(DuplicateRequestError):
        check_no_existing_request(a, b, FakeRequest(sender_id=b, recipient_id=a))


def test_existing_accepted_request_still_blocks():
    a, b = uuid4(), uuid4()
    accepted = FakeRequest(
        sender_id=a, recipient_id=b, status=RequestStatus.ACCEPTED.value,
    )
    with pytest.raises(DuplicateRequestError):
        check_no_existing_request(a, b, accepted)


def test_validate_send_returns_pending_draft():
    actor, target = uuid4(), FakeUser()
    draft = validate_send_prerequisites(actor, target, None)
    assert draft.sender_id == actor
    assert draft.recipient_id == target.id
    assert draft.status == RequestStatus.PENDING
    assert draft.pair == canonical_pair(actor, target.id)


def test_validate_send_checks_self_first():
    """Self request wins even when a record for the 'pair' exists."""
    me = FakeUser()
    with pytest.raises(SelfRequestError):
        validate_send_prerequisites(
            me.id, me, FakeRequest(sender_id=me.id, recipient_id=me.id),
        )


def test_validate_send_checks_friends_before_duplicates():
    actor, target = FakeUser(), FakeUser()
    befriend(actor, target)
    existing = FakeRequest(
        sender_id=actor.id, recipient_id=target.id,
        status=RequestStatus.ACCEPTED.value,
    )
    with pytest.raises(AlreadyFriendsError):
        validate_send_prerequisites(actor.id, target, existing)


# ─── accept checks ───────────────────────────────────────────────

def test_recipient_can_accept():
    sender, recipient = uuid4(), uuid4()
    request = FakeRequest(sender_id=sender, recipient_id=recipient)
    assert check_can_accept(recipient, request) is None


def test_sender_cannot_self_accept():
    sender, recipient = uuid4(), uuid4()
    request = FakeRequest(sender_id=sender, recipient_id=recipient)
    with pytest.raises(ForbiddenError) as exc:
        check_can_accept(sender, request)
    assert exc.value.http_status == 403
    assert exc.value.context.request_id == str(request.id)


def test_third_party_cannot_accept():
    request = FakeRequest(sender_id=uuid4(), recipient_id=uuid4())
    with pytest.raises(ForbiddenError):
        check_can_accept(uuid4(), request)


def test_is_reaccept_only_for_accepted():
    pending = FakeRequest(sender_id=uuid4(), recipient_id=uuid4())
    accepted = FakeRequest(
        sender_id=uuid4(), recipient_id=uuid4(),
        status=RequestStatus.ACCEPTED.value,
    )
    assert is_reaccept(pending) is False
    assert is_reaccept(accepted) is True
