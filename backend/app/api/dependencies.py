"""
API Dependencies

Actor extraction and re-exported service dependencies.

The tracker does not authenticate. Callers pass the acting counselor as
``Authorization: Bearer <uuid>``; the header is parsed, not verified.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials


logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _parse_actor(token: str) -> UUID:
    try:
        return UUID(token)
    except ValueError:
        logger.warning("Rejected malformed actor token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization token",
        )


async def get_current_actor_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UUID:
    """
    Acting counselor id from the bearer header.

    Raises:
        HTTPException 401: header missing or not a UUID
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _parse_actor(credentials.credentials)


# =============================================================================
# Re-export DB dependencies for a single import source
# =============================================================================
from app.infrastructure.db.dependencies import (  # noqa: E402, F401
    SessionDep,
    TrackingServiceDep,
    get_tracking_service,
)
