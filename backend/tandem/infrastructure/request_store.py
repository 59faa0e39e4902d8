"""SQL Connection Request Store — ConnectionRequestStore protocol over connection_requests.

Invariants:
    - find_by_unordered_pair(a, b) == find_by_unordered_pair(b, a)
    - insert never bypasses the (pair_low, pair_high) UNIQUE constraint
    - update_status stamps accepted_at once, on the first transition to accepted
    - Never commits; the calling service owns the transaction

Design Decisions:
    - Pair lookup uses the canonical columns, the same key the UNIQUE
      constraint guards, so check and constraint can never disagree
    - List queries newest first
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tandem.core.domain_types import RequestId, RequestStatus, UserId
from tandem.core.enforce_connections import canonical_pair
from tandem.core.errors import NotFoundError
from tandem.core.repository_protocols import ConnectionRequestDraft
from tandem.models.connection_request import ConnectionRequest


class SqlConnectionRequestStore:
    """ConnectionRequestStore implementation over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, request_id: RequestId) -> ConnectionRequest | None:
        return await self.db.get(ConnectionRequest, request_id)

    async def find_by_unordered_pair(
        self, a: UserId, b: UserId,
    ) -> ConnectionRequest | None:
        low, high = canonical_pair(a, b)
        result = await self.db.execute(
            select(ConnectionRequest)
            .where(ConnectionRequest.pair_low == low)
            .where(ConnectionRequest.pair_high == high),
        )
        return result.scalar_one_or_none()

    async def find_by_recipient_and_status(
        self, user_id: UserId, status: RequestStatus,
    ) -> list[ConnectionRequest]:
        result = await self.db.execute(
            select(ConnectionRequest)
            .where(ConnectionRequest.recipient_id == user_id)
            .where(ConnectionRequest.status == status.value)
            .order_by(ConnectionRequest.created_at.desc()),
        )
        return list(result.scalars().all())

    async def find_by_sender_and_status(
        self, user_id: UserId, status: RequestStatus,
    ) -> list[ConnectionRequest]:
        result = await self.db.execute(
            select(ConnectionRequest)
            .where(ConnectionRequest.sender_id == user_id)
            .where(ConnectionRequest.status == status.value)
            .order_by(ConnectionRequest.created_at.desc()),
        )
        return list(result.scalars().all())

    async def insert(self, draft: ConnectionRequestDraft) -> ConnectionRequest:
        """Stage a new request. Constraint violations surface at commit."""
        low, high = draft.pair
        request = ConnectionRequest(
            id=RequestId(uuid.uuid4()),
            sender_id=draft.sender_id,
            recipient_id=draft.recipient_id,
            pair_low=low,
            pair_high=high,
            status=draft.status.value,
            created_at=datetime.now(timezone.utc),
        )
        self.db.add(request)
        return request

    async def update_status(
        self, request_id: RequestId, status: RequestStatus,
    ) -> None:
        request = await self.find_by_id(request_id)
        if request is None:
            raise NotFoundError("ConnectionRequest", str(request_id))
        if status == RequestStatus.ACCEPTED and request.accepted_at is None:
            request.accepted_at = datetime.now(timezone.utc)
        request.status = status.value
        await self.db.flush()
