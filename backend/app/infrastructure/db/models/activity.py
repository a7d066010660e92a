"""
Activity Log SQLModel

Audit trail of phase changes, reopens, country tracks and application
status changes.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import Column
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

from app.domain.workflow.interfaces import ActivityEntry
from app.infrastructure.db.models.base import BaseModel


class Activity(BaseModel, table=True):
    """One activity-log row."""

    __tablename__ = "activities"

    student_id: UUID = Field(..., foreign_key="students.id", index=True)
    actor_id: Optional[UUID] = Field(default=None, description="Counselor who acted")
    type: str = Field(..., max_length=50)
    description: str = Field(...)
    country: Optional[str] = Field(default=None, max_length=100)

    # "metadata" is reserved on declarative classes
    details: Optional[dict] = Field(
        default=None,
        sa_column=Column("metadata", JSONB, default=dict),
    )

    @classmethod
    def from_entry(
        cls,
        entry: ActivityEntry,
        student_id: UUID,
        actor_id: Optional[UUID] = None,
        country: Optional[str] = None,
    ) -> "Activity":
        return cls(
            student_id=student_id,
            actor_id=actor_id,
            type=entry.type.value,
            description=entry.description,
            country=country,
            details=dict(entry.metadata),
        )


class ActivityRead(SQLModel):
    id: UUID
    student_id: UUID
    actor_id: Optional[UUID] = None
    type: str
    description: str
    country: Optional[str] = None
    details: Optional[dict] = None
    created_at: datetime
