"""Connection Request Routes — send, accept and list friend requests.

Invariants:
    - Every route acts on behalf of the resolved actor (get_current_actor_id)
    - Routes never contain business logic (delegate to ConnectionRequestService)
    - Domain failures propagate as TandemError to the global handler

Design Decisions:
    - Accept is POST .../{id}/accept, not PUT/PATCH on status: clients cannot
      write arbitrary statuses
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tandem.api.dependencies import get_current_actor_id
from tandem.core.domain_types import RequestId, RequestStatus, UserId
from tandem.infrastructure.database import get_db
from tandem.schemas.social import (
    AcceptedConnectionResponse, ConnectionRequestResponse,
    RequestStatusResponse, RequestsOverviewResponse, SendRequestBody,
)
from tandem.services.connection_requests import ConnectionRequestService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/connections/requests", tags=["connections"])


@router.post(
    "", response_model=RequestStatusResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_request(
    body: SendRequestBody,
    actor_id: UserId = Depends(get_current_actor_id),
    db: AsyncSession = Depends(get_db),
):
    """Send a connection request to another user."""
    request = await ConnectionRequestService(db).send_connection_request(
        actor_id, UserId(body.target_id),
    )
    return RequestStatusResponse(request_id=request.id, status=request.status)


@router.post("/{request_id}/accept", response_model=RequestStatusResponse)
async def accept_request(
    request_id: UUID,
    actor_id: UserId = Depends(get_current_actor_id),
    db: AsyncSession = Depends(get_db),
):
    """Accept a request addressed to the actor."""
    request = await ConnectionRequestService(db).accept_connection_request(
        actor_id, RequestId(request_id),
    )
    return RequestStatusResponse(
        request_id=request.id, status=RequestStatus.ACCEPTED,
    )


@router.get("", response_model=RequestsOverviewResponse)
async def requests_overview(
    actor_id: UserId = Depends(get_current_actor_id),
    db: AsyncSession = Depends(get_db),
):
    """Incoming pending requests plus accepted history."""
    incoming, accepted = await ConnectionRequestService(
        db,
    ).list_requests_overview(actor_id)
    return RequestsOverviewResponse(
        incoming_requests=[
            ConnectionRequestResponse.from_incoming(v) for v in incoming
        ],
        accepted_requests=[
            AcceptedConnectionResponse.from_accepted(e) for e in accepted
        ],
    )


@router.get("/incoming", response_model=list[ConnectionRequestResponse])
async def incoming_requests(
    actor_id: UserId = Depends(get_current_actor_id),
    db: AsyncSession = Depends(get_db),
):
    views = await ConnectionRequestService(db).list_incoming_pending(actor_id)
    return [ConnectionRequestResponse.from_incoming(v) for v in views]


@router.get("/outgoing", response_model=list[ConnectionRequestResponse])
async def outgoing_requests(
    actor_id: UserId = Depends(get_current_actor_id),
    db: AsyncSession = Depends(get_db),
):
    views = await ConnectionRequestService(db).list_outgoing_pending(actor_id)
    return [ConnectionRequestResponse.from_outgoing(v) for v in views]


@router.get("/outgoing/recipient-ids", response_model=list[UUID])
async def outgoing_recipient_ids(
    actor_id: UserId = Depends(get_current_actor_id),
    db: AsyncSession = Depends(get_db),
):
    """Users the actor already has a pending request to."""
    return await ConnectionRequestService(db).pending_recipient_ids(actor_id)


@router.get("/accepted", response_model=list[AcceptedConnectionResponse])
async def accepted_requests(
    actor_id: UserId = Depends(get_current_actor_id),
    db: AsyncSession = Depends(get_db),
):
    entries = await ConnectionRequestService(
        db,
    ).list_accepted_as_either_party(actor_id)
    return [AcceptedConnectionResponse.from_accepted(e) for e in entries]
