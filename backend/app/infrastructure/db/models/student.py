"""
Student SQLModel

A counselor's student. The ``current_phase`` column is the global phase
slot: it drives country-less views only and is never synchronized with
the per-country profiles.
"""

from typing import Optional
from uuid import UUID

from sqlmodel import Field, SQLModel

from app.domain.workflow.phases import FIRST_PHASE
from app.infrastructure.db.models.base import BaseModel


class StudentBase(SQLModel):
    """Shared student fields."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255, unique=True, index=True)
    phone: Optional[str] = Field(default=None, max_length=50)

    target_countries: Optional[str] = Field(
        default=None,
        description="Free-text or JSON list of destination countries"
    )


class Student(StudentBase, BaseModel, table=True):
    """Student record."""

    __tablename__ = "students"

    counselor_id: Optional[UUID] = Field(default=None, index=True)
    current_phase: str = Field(
        default=FIRST_PHASE.value,
        max_length=50,
        description="Global phase slot for country-less views"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class StudentCreate(StudentBase):
    counselor_id: Optional[UUID] = None
