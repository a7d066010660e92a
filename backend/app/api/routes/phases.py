"""
Phase Routes

Phase catalog, phase change and phase reopen endpoints.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.api.dependencies import TrackingServiceDep, get_current_actor_id
from app.config.settings import get_settings
from app.domain.workflow.phases import PHASE_DESCRIPTIONS, PHASE_LABELS, PHASE_SEQUENCE
from app.domain.workflow.requirements import RequirementTable


logger = logging.getLogger(__name__)
router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================

class PhaseChangeRequest(BaseModel):
    """Request to move a student (or one country track) to another phase."""
    target_phase: str = Field(..., min_length=1, max_length=50)
    country: Optional[str] = Field(None, max_length=100)
    remarks: Optional[str] = Field(None, max_length=1000)


class PhaseReopenRequest(BaseModel):
    """Request to reopen a completed phase of a country track."""
    phase: str = Field(..., min_length=1, max_length=50)
    country: str = Field(..., min_length=1, max_length=100)


class PhaseInfo(BaseModel):
    phase: str
    index: int
    label: str
    description: str
    exit_requirements: List[str]
    entry_requirements: List[str]


# ============================================================================
# Endpoints
# ============================================================================

@router.get("/phases", response_model=List[PhaseInfo])
async def list_phases():
    """Ordered phase catalog with the requirement table in effect."""
    table = RequirementTable.from_settings(get_settings().enforce_entry_documents)
    return [
        PhaseInfo(
            phase=phase.value,
            index=index,
            label=PHASE_LABELS[phase],
            description=PHASE_DESCRIPTIONS.get(phase, ""),
            exit_requirements=list(table.exit_for(phase)),
            entry_requirements=list(table.entry_for(phase)),
        )
        for index, phase in enumerate(PHASE_SEQUENCE)
    ]


@router.post("/students/{student_id}/phase")
async def change_phase(
    student_id: UUID,
    request: PhaseChangeRequest,
    service: TrackingServiceDep,
    actor_id: UUID = Depends(get_current_actor_id),
) -> Dict[str, Any]:
    """
    Change a student's phase.

    With ``country`` the country track moves; without it the student's
    global phase moves. Blocked changes answer 400 with the missing
    documents listed.
    """
    return await service.change_phase(
        student_id,
        request.target_phase,
        actor_id=actor_id,
        country=request.country,
        remarks=request.remarks,
    )


@router.post("/students/{student_id}/phase/reopen")
async def reopen_phase(
    student_id: UUID,
    request: PhaseReopenRequest,
    service: TrackingServiceDep,
    actor_id: UUID = Depends(get_current_actor_id),
) -> Dict[str, Any]:
    """Reopen a previous phase of a country track."""
    return await service.reopen_phase(
        student_id,
        request.country,
        request.phase,
        actor_id=actor_id,
    )
