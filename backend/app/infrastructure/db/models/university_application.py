"""
University Application SQLModel

Per student-country-university application record.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID

from sqlalchemy import Numeric
from sqlmodel import Field

from app.infrastructure.db.models.base import BaseModel


class ApplicationStatus(str, Enum):
    """Lifecycle of a single university application."""
    PENDING = "PENDING"
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    DEFERRED = "DEFERRED"
    WAITLISTED = "WAITLISTED"
    CONDITIONAL_OFFER = "CONDITIONAL_OFFER"


class UniversityApplication(BaseModel, table=True):
    """A student's application to one university."""

    __tablename__ = "university_applications"

    student_id: UUID = Field(..., foreign_key="students.id", index=True)
    university_name: str = Field(..., max_length=255)
    university_country: Optional[str] = Field(default=None, max_length=100)
    course_name: Optional[str] = Field(default=None, max_length=255)

    application_status: ApplicationStatus = Field(default=ApplicationStatus.PENDING)
    is_primary_choice: bool = Field(default=False)
    is_backup_choice: bool = Field(default=False)

    application_fee: Decimal = Field(default=Decimal("0.00"), sa_type=Numeric(10, 2))
    scholarship_amount: Decimal = Field(default=Decimal("0.00"), sa_type=Numeric(10, 2))
