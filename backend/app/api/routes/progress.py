"""
Progress Routes

Per-country progress, the multi-country overview and a stateless preview.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.api.dependencies import TrackingServiceDep
from app.domain.workflow.interfaces import (
    ApplicationSnapshot,
    DocumentSnapshot,
    ProfileSnapshot,
)
from app.domain.workflow.progress import CountryProgressCalculator


router = APIRouter()

_calculator = CountryProgressCalculator()


class DocumentIn(BaseModel):
    type: str
    status: str


class ApplicationIn(BaseModel):
    university_country: Optional[str] = None
    application_status: str


class ProgressPreviewRequest(BaseModel):
    """Snapshot to compute progress for, without touching stored data."""
    current_phase: Optional[str] = None
    country: str = Field(..., min_length=1, max_length=100)
    documents: List[DocumentIn] = Field(default_factory=list)
    applications: List[ApplicationIn] = Field(default_factory=list)


@router.get("/students/multi-country")
async def multi_country_overview(service: TrackingServiceDep) -> List[Dict[str, Any]]:
    """Students with more than one country track."""
    return await service.multi_country_overview()


@router.get("/students/{student_id}/progress")
async def student_progress(
    student_id: UUID,
    service: TrackingServiceDep,
) -> List[Dict[str, Any]]:
    """Progress report for each of the student's country tracks."""
    reports = await service.country_progress(student_id)
    return [report.to_dict() for report in reports]


@router.post("/progress/preview")
async def preview_progress(request: ProgressPreviewRequest) -> Dict[str, Any]:
    """Compute progress for a posted snapshot."""
    profile = ProfileSnapshot(current_phase=request.current_phase, country=request.country)
    documents = [DocumentSnapshot(type=d.type, status=d.status) for d in request.documents]
    applications = [
        ApplicationSnapshot(
            university_country=a.university_country,
            application_status=a.application_status,
        )
        for a in request.applications
    ]
    return _calculator.describe_progress(profile, documents, applications).to_dict()
