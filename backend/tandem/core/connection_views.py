"""Connection Views — read-side projections of users and requests.

Invariants:
    - All functions are PURE: they shape data already loaded by the shell
    - PartnerProfile exposes only public profile fields (no email, no friend set)
    - AcceptedConnection.other_user is always the party that is NOT the actor
    - Accepted entries list recipient-side first, then sender-side
    - pending_recipient_ids is derived from the outgoing list, never stored
    - Friend-list filters keep input order and treat None or "" as "no filter"

Design Decisions:
    - Tagged variant (role + other_user) over merging request dicts: the role is
      a field, not an inferred key
    - Frozen dataclasses: views are snapshots, mutating one is always a bug
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from tandem.core.domain_types import CounterpartyRole, UserId
from tandem.core.repository_protocols import ConnectionRequestLike, UserLike


@dataclass(frozen=True)
class PartnerProfile:
    """Public projection of a user shown in lists."""
    id: UserId
    full_name: str
    profile_pic: str | None
    native_language: str | None
    learning_language: str | None


@dataclass(frozen=True)
class PendingRequestView:
    """A pending request enriched with the counterparty's profile."""
    request: ConnectionRequestLike
    counterparty: PartnerProfile | None


@dataclass(frozen=True)
class AcceptedConnection:
    """An accepted request tagged with the actor's side of it."""
    request: ConnectionRequestLike
    role: CounterpartyRole
    other_user: PartnerProfile | None


def project_profile(user: UserLike) -> PartnerProfile:
    return PartnerProfile(
        id=user.id,
        full_name=user.full_name,
        profile_pic=user.profile_pic,
        native_language=user.native_language,
        learning_language=user.learning_language,
    )


def _lookup(
    profiles: Mapping[UserId, UserLike], user_id: UserId,
) -> PartnerProfile | None:
    user = profiles.get(user_id)
    return project_profile(user) if user is not None else None


def counterparty_ids(
    requests: Iterable[ConnectionRequestLike], actor_id: UserId,
) -> set[UserId]:
    """Ids of the other party on each request, for one batched profile lookup."""
    return {
        r.recipient_id if r.sender_id == actor_id else r.sender_id
        for r in requests
    }


def enrich_incoming(
    requests: Iterable[ConnectionRequestLike],
    profiles: Mapping[UserId, UserLike],
) -> list[PendingRequestView]:
    """Incoming requests carry the sender's profile."""
    return [
        PendingRequestView(request=r, counterparty=_lookup(profiles, r.sender_id))
        for r in requests
    ]


def enrich_outgoing(
    requests: Iterable[ConnectionRequestLike],
    profiles: Mapping[UserId, UserLike],
) -> list[PendingRequestView]:
    """Outgoing requests carry the recipient's profile."""
    return [
        PendingRequestView(
            request=r, counterparty=_lookup(profiles, r.recipient_id),
        )
        for r in requests
    ]


def build_accepted_connections(
    as_recipient: Iterable[ConnectionRequestLike],
    as_sender: Iterable[ConnectionRequestLike],
    profiles: Mapping[UserId, UserLike],
) -> list[AcceptedConnection]:
    """Union of accepted requests on either side, tagged with the actor's role."""
    entries = [
        AcceptedConnection(
            request=r, role=CounterpartyRole.RECIPIENT,
            other_user=_lookup(profiles, r.sender_id),
        )
        for r in as_recipient
    ]
    entries.extend(
        AcceptedConnection(
            request=r, role=CounterpartyRole.SENDER,
            other_user=_lookup(profiles, r.recipient_id),
        )
        for r in as_sender
    )
    return entries


def pending_recipient_ids(
    outgoing: Iterable[PendingRequestView],
) -> list[UserId]:
    """Recipients the actor already has a pending request to, in list order."""
    seen: dict[UserId, None] = {}
    for view in outgoing:
        seen.setdefault(view.request.recipient_id, None)
    return list(seen)


def filter_by_learning_language(
    profiles: Iterable[PartnerProfile], language: str | None,
) -> list[PartnerProfile]:
    """Case-insensitive filter on learning_language. None keeps everything."""
    if not language:
        return list(profiles)
    wanted = language.strip().lower()
    return [
        p for p in profiles
        if p.learning_language and p.learning_language.lower() == wanted
    ]


def filter_by_name(
    profiles: Iterable[PartnerProfile], query: str | None,
) -> list[PartnerProfile]:
    """Case-insensitive substring search on full_name. None keeps everything."""
    if not query:
        return list(profiles)
    needle = query.strip().lower()
    return [p for p in profiles if needle in p.full_name.lower()]
