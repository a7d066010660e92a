"""
SQLModel ORM Models for the Application Phase Tracker

Import models here to register them with SQLModel.metadata.
"""

from app.infrastructure.db.models.base import (
    BaseModel,
    TimestampMixin,
    UUIDMixin,
)
from app.infrastructure.db.models.student import (
    Student,
    StudentBase,
    StudentCreate,
)
from app.infrastructure.db.models.country_profile import (
    StudentCountryProfile,
    CountryProfileCreate,
    CountryProfileRead,
    VisaStatus,
)
from app.infrastructure.db.models.document import Document
from app.infrastructure.db.models.university_application import (
    ApplicationStatus,
    UniversityApplication,
)
from app.infrastructure.db.models.phase_metadata import PhaseMetadata
from app.infrastructure.db.models.activity import Activity, ActivityRead


__all__ = [
    # Base
    "BaseModel",
    "TimestampMixin",
    "UUIDMixin",
    # Student
    "Student",
    "StudentBase",
    "StudentCreate",
    # Country profiles
    "StudentCountryProfile",
    "CountryProfileCreate",
    "CountryProfileRead",
    "VisaStatus",
    # Documents and applications
    "Document",
    "ApplicationStatus",
    "UniversityApplication",
    # Workflow bookkeeping
    "PhaseMetadata",
    "Activity",
    "ActivityRead",
]
