"""Request Dependencies — resolves the acting user for every social endpoint.

Invariants:
    - Missing, malformed, or unknown actor id -> UnauthenticatedError (401)
    - The returned id always belongs to an existing user

Design Decisions:
    - Header-based identity: authentication happens upstream, this service
      trusts the resolved id (header name configurable via settings)
"""

from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tandem.config import get_settings
from tandem.core.domain_types import UserId
from tandem.core.errors import UnauthenticatedError
from tandem.infrastructure.database import get_db
from tandem.infrastructure.user_directory import SqlUserDirectory


async def get_current_actor_id(
    request: Request, db: AsyncSession = Depends(get_db),
) -> UserId:
    header = get_settings().actor_header
    raw = request.headers.get(header)
    if not raw:
        raise UnauthenticatedError(f"Missing {header} header")
    try:
        actor_id = UserId(UUID(raw))
    except ValueError:
        raise UnauthenticatedError(f"Malformed {header} header")
    if await SqlUserDirectory(db).find_by_id(actor_id) is None:
        raise UnauthenticatedError("Unknown user")
    return actor_id
