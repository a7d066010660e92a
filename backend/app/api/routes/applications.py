"""
Application Routes

University application status updates and the student activity log.
"""

from typing import Any, Dict, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from app.api.dependencies import TrackingServiceDep, get_current_actor_id
from app.infrastructure.db.models.activity import ActivityRead


router = APIRouter()


class ApplicationStatusUpdate(BaseModel):
    status: str = Field(..., min_length=1, max_length=50)


@router.patch("/students/{student_id}/applications/{application_id}/status")
async def update_application_status(
    student_id: UUID,
    application_id: UUID,
    request: ApplicationStatusUpdate,
    service: TrackingServiceDep,
    actor_id: UUID = Depends(get_current_actor_id),
) -> Dict[str, Any]:
    """
    Set an application's status.

    The matching country track's application counts and totals are
    recomputed in the same transaction.
    """
    return await service.update_application_status(
        student_id, application_id, request.status, actor_id=actor_id
    )


@router.get(
    "/students/{student_id}/activities",
    response_model=List[ActivityRead],
)
async def activity_history(
    student_id: UUID,
    service: TrackingServiceDep,
    limit: int = Query(default=100, ge=1, le=500),
):
    return await service.activity_history(student_id, limit=limit)
