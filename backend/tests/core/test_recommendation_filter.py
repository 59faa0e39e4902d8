"""Recommendation Filter — exclusion rules over a flat candidate pool."""

from tandem.core.recommendation_filter import (
    excluded_ids, filter_recommendations, is_recommendable,
)
from tests.core.fakes import FakeUser, befriend


def test_actor_never_recommended():
    actor = FakeUser()
    assert filter_recommendations(actor, [actor]) == []


def test_friends_never_recommended():
    actor, friend, stranger = FakeUser(), FakeUser(), FakeUser()
    befriend(actor, friend)
    assert filter_recommendations(actor, [friend, stranger]) == [stranger]


def test_non_onboarded_never_recommended():
    actor = FakeUser()
    pending = FakeUser(is_onboarded=False)
    assert filter_recommendations(actor, [pending]) == []


def test_non_onboarded_excluded_even_when_friend_of_friend():
    actor, mutual, newcomer = FakeUser(), FakeUser(), FakeUser(is_onboarded=False)
    befriend(actor, mutual)
    befriend(mutual, newcomer)
    assert newcomer not in filter_recommendations(actor, [mutual, newcomer])


def test_input_order_preserved():
    actor = FakeUser()
    pool = [FakeUser(full_name=n) for n in ("c", "a", "b")]
    assert [u.full_name for u in filter_recommendations(actor, pool)] == ["c", "a", "b"]


def test_empty_pool_returns_empty_list():
    assert filter_recommendations(FakeUser(), []) == []


def test_excluded_ids_contains_self_and_friends():
    actor, friend = FakeUser(), FakeUser()
    befriend(actor, friend)
    assert excluded_ids(actor) == {actor.id, friend.id}


def test_is_recommendable():
    candidate = FakeUser()
    assert is_recommendable(candidate, set()) is True
    assert is_recommendable(candidate, {candidate.id}) is False
