"""
Phase Metadata SQLModel

Reopen bookkeeping per (student, country, phase).
"""

from uuid import UUID

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from app.domain.workflow.interfaces import PhaseMetadataState, PhaseStatus
from app.infrastructure.db.models.base import BaseModel


class PhaseMetadata(BaseModel, table=True):
    """Status and reopen counter of one phase in one country track."""

    __tablename__ = "phase_metadata"
    __table_args__ = (
        UniqueConstraint(
            "student_id", "country", "phase_name", name="uq_phase_metadata"
        ),
    )

    student_id: UUID = Field(..., foreign_key="students.id", index=True)
    country: str = Field(..., max_length=100)
    phase_name: str = Field(..., max_length=50)

    status: PhaseStatus = Field(default=PhaseStatus.PENDING)
    reopen_count: int = Field(default=0, ge=0)
    max_reopen_allowed: int = Field(default=2, ge=0)
    final_edit_allowed: bool = Field(default=True)

    def to_state(self) -> PhaseMetadataState:
        return PhaseMetadataState(
            phase=self.phase_name,
            status=PhaseStatus(self.status),
            reopen_count=self.reopen_count,
            max_reopen_allowed=self.max_reopen_allowed,
            final_edit_allowed=self.final_edit_allowed,
        )

    def apply_state(self, state: PhaseMetadataState) -> None:
        self.status = state.status
        self.reopen_count = state.reopen_count
        self.max_reopen_allowed = state.max_reopen_allowed
        self.final_edit_allowed = state.final_edit_allowed
