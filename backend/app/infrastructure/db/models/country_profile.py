"""
Student Country Profile SQLModel

One independent application track per (student, normalized country).
"""

from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID

from sqlalchemy import Numeric, UniqueConstraint
from sqlmodel import Field, SQLModel

from app.domain.workflow.phases import FIRST_PHASE
from app.infrastructure.db.models.base import BaseModel


class VisaStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class CountryProfileBase(SQLModel):
    """Fields shared by create and read schemas."""

    country: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Normalized country name"
    )
    preferred_country: bool = Field(default=False)
    country_ranking: Optional[int] = Field(default=None, ge=1)
    notes: Optional[str] = Field(default=None)


class StudentCountryProfile(CountryProfileBase, BaseModel, table=True):
    """Per-country phase and application aggregates."""

    __tablename__ = "student_country_profiles"
    __table_args__ = (
        UniqueConstraint("student_id", "country", name="uq_student_country"),
    )

    student_id: UUID = Field(..., foreign_key="students.id", index=True)

    current_phase: str = Field(default=FIRST_PHASE.value, max_length=50)

    # Application counts
    total_applications: int = Field(default=0, ge=0)
    primary_applications: int = Field(default=0, ge=0)
    backup_applications: int = Field(default=0, ge=0)
    accepted_applications: int = Field(default=0, ge=0)
    rejected_applications: int = Field(default=0, ge=0)
    pending_applications: int = Field(default=0, ge=0)

    # Financials
    total_application_fees: Decimal = Field(
        default=Decimal("0.00"),
        sa_type=Numeric(10, 2),
    )
    total_scholarship_amount: Decimal = Field(
        default=Decimal("0.00"),
        sa_type=Numeric(10, 2),
    )

    visa_required: bool = Field(default=True)
    visa_status: VisaStatus = Field(default=VisaStatus.NOT_STARTED)


class CountryProfileCreate(SQLModel):
    """Request body for adding a country track."""
    country: str = Field(..., min_length=1, max_length=100)
    preferred_country: bool = False
    country_ranking: Optional[int] = Field(default=None, ge=1)
    notes: Optional[str] = None


class CountryProfileRead(CountryProfileBase):
    id: UUID
    student_id: UUID
    current_phase: str
    total_applications: int
    primary_applications: int
    backup_applications: int
    accepted_applications: int
    rejected_applications: int
    pending_applications: int
    total_application_fees: Decimal
    total_scholarship_amount: Decimal
    visa_status: VisaStatus
