"""
Country Profile Routes

Adding and listing a student's destination-country tracks.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from app.api.dependencies import TrackingServiceDep, get_current_actor_id
from app.infrastructure.db.models.country_profile import (
    CountryProfileCreate,
    CountryProfileRead,
)


router = APIRouter()


@router.get(
    "/students/{student_id}/countries",
    response_model=List[CountryProfileRead],
)
async def list_country_profiles(student_id: UUID, service: TrackingServiceDep):
    """Tracks with per-country application counts and totals."""
    return await service.list_country_profiles(student_id)


@router.post(
    "/students/{student_id}/countries",
    response_model=CountryProfileRead,
    status_code=201,
)
async def create_country_profile(
    student_id: UUID,
    request: CountryProfileCreate,
    service: TrackingServiceDep,
    actor_id: UUID = Depends(get_current_actor_id),
):
    """Add a country track; the country name is normalized ("UK" -> "United Kingdom")."""
    return await service.create_country_profile(student_id, request, actor_id=actor_id)
