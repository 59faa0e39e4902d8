"""Discovery Routes — partner recommendations and the actor's friend list.

Invariants:
    - Routes never contain business logic (delegate to DiscoveryService)
    - Empty results are 200 with [] (never 404)
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tandem.api.dependencies import get_current_actor_id
from tandem.core.domain_types import UserId
from tandem.infrastructure.database import get_db
from tandem.schemas.social import PartnerProfileResponse, UserResponse
from tandem.services.discovery import DiscoveryService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/recommendations", response_model=list[UserResponse])
async def recommendations(
    actor_id: UserId = Depends(get_current_actor_id),
    db: AsyncSession = Depends(get_db),
):
    """Onboarded users the actor is not yet friends with."""
    users = await DiscoveryService(db).recommend(actor_id)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/friends", response_model=list[PartnerProfileResponse])
async def friends(
    learning_language: str | None = Query(None, max_length=50),
    q: str | None = Query(None, max_length=100),
    actor_id: UserId = Depends(get_current_actor_id),
    db: AsyncSession = Depends(get_db),
):
    """The actor's friend list, optionally narrowed by learning language and name."""
    profiles = await DiscoveryService(db).list_friends(
        actor_id, learning_language, name_query=q,
    )
    return [PartnerProfileResponse.model_validate(p) for p in profiles]
