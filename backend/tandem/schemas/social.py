"""Social Schemas — Pydantic models for the connection and discovery endpoints.

Invariants:
    - PartnerProfileResponse never carries email or friend ids
    - AcceptedConnectionResponse.role is "sender" or "recipient"
    - Outgoing requests carry `recipient`, incoming carry `sender` (the other stays None)

Design Decisions:
    - from_attributes on response models: build straight from ORM rows and core dataclasses
    - Builders (from_incoming/from_outgoing/from_accepted) keep route handlers free of shaping logic
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from tandem.core.connection_views import AcceptedConnection, PendingRequestView
from tandem.core.domain_types import CounterpartyRole, RequestStatus


class SendRequestBody(BaseModel):
    """POST /connections/requests body."""
    target_id: UUID


class RequestStatusResponse(BaseModel):
    """Result of send/accept: the request id and its new status."""
    request_id: UUID
    status: RequestStatus


class PartnerProfileResponse(BaseModel):
    """Public partner card."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    full_name: str
    profile_pic: str | None = None
    native_language: str | None = None
    learning_language: str | None = None


class UserResponse(PartnerProfileResponse):
    """Recommendation card — partner profile plus discovery fields."""
    bio: str = ""
    location: str | None = None
    is_onboarded: bool


class ConnectionRequestResponse(BaseModel):
    """A connection request with whichever counterparty profile applies."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    sender_id: UUID
    recipient_id: UUID
    status: RequestStatus
    created_at: datetime
    accepted_at: datetime | None = None
    sender: PartnerProfileResponse | None = None
    recipient: PartnerProfileResponse | None = None

    @classmethod
    def from_incoming(cls, view: PendingRequestView) -> "ConnectionRequestResponse":
        return cls._from_request(view.request, sender=view.counterparty)

    @classmethod
    def from_outgoing(cls, view: PendingRequestView) -> "ConnectionRequestResponse":
        return cls._from_request(view.request, recipient=view.counterparty)

    @classmethod
    def _from_request(cls, request, **profiles) -> "ConnectionRequestResponse":
        return cls(
            id=request.id,
            sender_id=request.sender_id,
            recipient_id=request.recipient_id,
            status=request.status,
            created_at=request.created_at,
            accepted_at=request.accepted_at,
            **{
                key: PartnerProfileResponse.model_validate(p) if p else None
                for key, p in profiles.items()
            },
        )


class AcceptedConnectionResponse(BaseModel):
    """Accepted request tagged with the actor's role and the other party."""
    request: ConnectionRequestResponse
    role: CounterpartyRole
    other_user: PartnerProfileResponse | None

    @classmethod
    def from_accepted(cls, entry: AcceptedConnection) -> "AcceptedConnectionResponse":
        if entry.role == CounterpartyRole.RECIPIENT:
            request = ConnectionRequestResponse._from_request(
                entry.request, sender=entry.other_user,
            )
        else:
            request = ConnectionRequestResponse._from_request(
                entry.request, recipient=entry.other_user,
            )
        return cls(
            request=request,
            role=entry.role,
            other_user=(
                PartnerProfileResponse.model_validate(entry.other_user)
                if entry.other_user else None
            ),
        )


class RequestsOverviewResponse(BaseModel):
    """Notifications view: what is waiting on the actor, and who they connected with."""
    incoming_requests: list[ConnectionRequestResponse]
    accepted_requests: list[AcceptedConnectionResponse]
