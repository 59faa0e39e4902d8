"""Connection Views — profile projection, enrichment and tagged accepted entries."""

from uuid import uuid4

from tandem.core.connection_views import (
    PartnerProfile,
    build_accepted_connections,
    counterparty_ids,
    enrich_incoming,
    enrich_outgoing,
    filter_by_learning_language,
    filter_by_name,
    pending_recipient_ids,
    project_profile,
)
from tandem.core.domain_types import CounterpartyRole, RequestStatus
from tests.core.fakes import FakeRequest, FakeUser


def _profiles(*users):
    return {u.id: u for u in users}


def test_project_profile_keeps_public_fields_only():
    user = FakeUser(full_name="Kenji", native_language="japanese")
    profile = project_profile(user)
    assert profile == PartnerProfile(
        id=user.id, full_name="Kenji", profile_pic=user.profile_pic,
        native_language="japanese", learning_language=user.learning_language,
    )
    assert not hasattr(profile, "friend_ids")


def test_counterparty_ids_picks_other_side():
    me, a, b = uuid4(), uuid4(), uuid4()
    requests = [
        FakeRequest(sender_id=a, recipient_id=me),
        FakeRequest(sender_id=me, recipient_id=b),
    ]
    assert counterparty_ids(requests, me) == {a, b}


def test_incoming_enriched_with_sender():
    sender, me = FakeUser(full_name="Sender"), FakeUser()
    request = FakeRequest(sender_id=sender.id, recipient_id=me.id)
    [view] = enrich_incoming([request], _profiles(sender))
    assert view.request is request
    assert view.counterparty.full_name == "Sender"


def test_outgoing_enriched_with_recipient():
    me, recipient = FakeUser(), FakeUser(full_name="Recipient")
    request = FakeRequest(sender_id=me.id, recipient_id=recipient.id)
    [view] = enrich_outgoing([request], _profiles(recipient))
    assert view.counterparty.full_name == "Recipient"


def test_missing_profile_yields_none_counterparty():
    request = FakeRequest(sender_id=uuid4(), recipient_id=uuid4())
    [view] = enrich_incoming([request], {})
    assert view.counterparty is None


def test_accepted_entries_tagged_with_role_and_other_user():
    me, a, b = FakeUser(), FakeUser(full_name="A"), FakeUser(full_name="B")
    as_recipient = FakeRequest(
        sender_id=a.id, recipient_id=me.id, status=RequestStatus.ACCEPTED.value,
    )
    as_sender = FakeRequest(
        sender_id=me.id, recipient_id=b.id, status=RequestStatus.ACCEPTED.value,
    )
    entries = build_accepted_connections(
        [as_recipient], [as_sender], _profiles(a, b),
    )
    assert [(e.role, e.other_user.full_name) for e in entries] == [
        (CounterpartyRole.RECIPIENT, "A"),
        (CounterpartyRole.SENDER, "B"),
    ]


def test_pending_recipient_ids_derived_from_outgoing():
    me, a, b = FakeUser(), FakeUser(), FakeUser()
    views = enrich_outgoing(
        [
            FakeRequest(sender_id=me.id, recipient_id=a.id),
            FakeRequest(sender_id=me.id, recipient_id=b.id),
        ],
        _profiles(a, b),
    )
    assert pending_recipient_ids(views) == [a.id, b.id]


def test_pending_recipient_ids_empty():
    assert pending_recipient_ids([]) == []


def test_filter_by_learning_language_case_insensitive():
    profiles = [
        project_profile(FakeUser(full_name="x", learning_language="Spanish")),
        project_profile(FakeUser(full_name="y", learning_language="french")),
        project_profile(FakeUser(full_name="z", learning_language=None)),
    ]
    assert [p.full_name for p in filter_by_learning_language(profiles, "spanish")] == ["x"]
    assert len(filter_by_learning_language(profiles, None)) == 3
    assert len(filter_by_learning_language(profiles, "")) == 3


def test_filter_by_name_is_case_insensitive_substring():
    profiles = [
        project_profile(FakeUser(full_name="Maria Silva")),
        project_profile(FakeUser(full_name="Silvio Costa")),
        project_profile(FakeUser(full_name="Kenji Sato")),
    ]
    assert [p.full_name for p in filter_by_name(profiles, "SILV")] == [
        "Maria Silva", "Silvio Costa",
    ]
    assert filter_by_name(profiles, "zz") == []
    assert len(filter_by_name(profiles, None)) == 3
    assert len(filter_by_name(profiles, "")) == 3
