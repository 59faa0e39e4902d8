"""Request Lifecycle Service — send, accept and list connection requests.

Invariants:
    - send: self check -> target lookup -> already-friends -> duplicate pair -> insert
    - send never touches friend sets
    - accept: status=accepted and BOTH friend edges commit together or not at all
    - accept on an already accepted request is a safe no-op (edges re-added idempotently)
    - Only the recipient may accept
    - Lists read the store on every call (no caching)

Design Decisions:
    - Rules live in core/enforce_connections.py; this class only sequences IO
      around them (functional core, imperative shell)
    - Store and directory injectable for tests; default to the SQL adapters
    - No notification on accept: downstream consumers read the accepted list
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from tandem.core.connection_views import (
    AcceptedConnection, PendingRequestView,
    build_accepted_connections, counterparty_ids,
    enrich_incoming, enrich_outgoing, pending_recipient_ids,
)
from tandem.core.domain_types import RequestId, RequestStatus, UserId
from tandem.core.enforce_connections import (
    check_can_accept, check_not_self, is_reaccept, validate_send_prerequisites,
)
from tandem.core.errors import ErrorContext, NotFoundError
from tandem.core.repository_protocols import (
    ConnectionRequestLike, ConnectionRequestStore, UserDirectory,
)
from tandem.infrastructure.database import unit_of_work
from tandem.infrastructure.request_store import SqlConnectionRequestStore
from tandem.infrastructure.user_directory import SqlUserDirectory

logger = logging.getLogger(__name__)


class ConnectionRequestService:
    """Friend request lifecycle for one actor-scoped unit of work."""

    def __init__(
        self,
        db: AsyncSession,
        store: ConnectionRequestStore | None = None,
        directory: UserDirectory | None = None,
    ):
        self.db = db
        self.store = store or SqlConnectionRequestStore(db)
        self.directory = directory or SqlUserDirectory(db)

    async def send_connection_request(
        self, actor_id: UserId, target_id: UserId,
    ) -> ConnectionRequestLike:
        """Create a pending request from actor to target."""
        check_not_self(actor_id, target_id)

        target = await self.directory.find_by_id(target_id)
        if target is None:
            raise NotFoundError(
                "User", str(target_id),
                ErrorContext(actor_id=str(actor_id), target_id=str(target_id)),
            )

        existing = await self.store.find_by_unordered_pair(actor_id, target_id)
        draft = validate_send_prerequisites(actor_id, target, existing)

        async with unit_of_work(
            self.db,
            "A connection request for these users was created concurrently",
            ErrorContext(actor_id=str(actor_id), target_id=str(target_id)),
        ):
            request = await self.store.insert(draft)
        logger.info(
            "Connection request sent",
            extra={
                "actor_id": actor_id, "target_id": target_id,
                "request_id": request.id,
            },
        )
        return request

    async def accept_connection_request(
        self, actor_id: UserId, request_id: RequestId,
    ) -> ConnectionRequestLike:
        """Accept a request addressed to the actor and link both friend sets."""
        request = await self.store.find_by_id(request_id)
        if request is None:
            raise NotFoundError(
                "ConnectionRequest", str(request_id),
                ErrorContext(actor_id=str(actor_id), request_id=str(request_id)),
            )
        check_can_accept(actor_id, request)
        already_accepted = is_reaccept(request)

        async with unit_of_work(
            self.db,
            "The friend graph was modified concurrently; retry the request",
            ErrorContext(
                actor_id=str(actor_id), target_id=str(request.sender_id),
                request_id=str(request_id),
            ),
        ):
            await self.store.update_status(request.id, RequestStatus.ACCEPTED)
            await self.directory.add_to_friend_set(
                request.sender_id, request.recipient_id,
            )
            await self.directory.add_to_friend_set(
                request.recipient_id, request.sender_id,
            )

        if already_accepted:
            logger.info(
                "Connection request re-accepted (no-op)",
                extra={"actor_id": actor_id, "request_id": request.id},
            )
        else:
            logger.info(
                "Connection request accepted",
                extra={
                    "actor_id": actor_id, "target_id": request.sender_id,
                    "request_id": request.id,
                },
            )
        return request

    async def list_incoming_pending(
        self, actor_id: UserId,
    ) -> list[PendingRequestView]:
        """Pending requests addressed to the actor, with sender profiles."""
        requests = await self.store.find_by_recipient_and_status(
            actor_id, RequestStatus.PENDING,
        )
        profiles = await self.directory.find_many(
            counterparty_ids(requests, actor_id),
        )
        return enrich_incoming(requests, profiles)

    async def list_outgoing_pending(
        self, actor_id: UserId,
    ) -> list[PendingRequestView]:
        """Pending requests sent by the actor, with recipient profiles."""
        requests = await self.store.find_by_sender_and_status(
            actor_id, RequestStatus.PENDING,
        )
        profiles = await self.directory.find_many(
            counterparty_ids(requests, actor_id),
        )
        return enrich_outgoing(requests, profiles)

    async def list_accepted_as_either_party(
        self, actor_id: UserId,
    ) -> list[AcceptedConnection]:
        """Accepted requests on either side, tagged with the actor's role."""
        as_recipient = await self.store.find_by_recipient_and_status(
            actor_id, RequestStatus.ACCEPTED,
        )
        as_sender = await self.store.find_by_sender_and_status(
            actor_id, RequestStatus.ACCEPTED,
        )
        profiles = await self.directory.find_many(
            counterparty_ids([*as_recipient, *as_sender], actor_id),
        )
        return build_accepted_connections(as_recipient, as_sender, profiles)

    async def list_requests_overview(
        self, actor_id: UserId,
    ) -> tuple[list[PendingRequestView], list[AcceptedConnection]]:
        """Incoming pending plus accepted history, in one call."""
        incoming = await self.list_incoming_pending(actor_id)
        accepted = await self.list_accepted_as_either_party(actor_id)
        return incoming, accepted

    async def pending_recipient_ids(self, actor_id: UserId) -> list[UserId]:
        """Users the actor is already waiting on."""
        return pending_recipient_ids(await self.list_outgoing_pending(actor_id))
