"""
Dependency Injection Providers for the Application Phase Tracker

FastAPI dependencies for database sessions and the tracking service.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.settings import get_settings
from app.domain.services import ApplicationTrackingService
from app.infrastructure.db.database import get_session


SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def get_tracking_service(
    session: SessionDep,
) -> AsyncGenerator[ApplicationTrackingService, None]:
    """
    Dependency provider for ApplicationTrackingService.

    Usage:
        @router.post("/students/{student_id}/phase")
        async def change_phase(service: TrackingServiceDep):
            ...
    """
    yield ApplicationTrackingService(session, get_settings())


TrackingServiceDep = Annotated[
    ApplicationTrackingService,
    Depends(get_tracking_service)
]
