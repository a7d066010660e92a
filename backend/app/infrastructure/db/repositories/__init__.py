"""
Repository Layer for the Application Phase Tracker

Exports all repository classes for dependency injection.
"""

from app.infrastructure.db.repositories.base_repository import (
    BaseRepository,
    IReadRepository,
    IWriteRepository,
)
from app.infrastructure.db.repositories.student_repository import StudentRepository
from app.infrastructure.db.repositories.country_profile_repository import (
    CountryProfileRepository,
)
from app.infrastructure.db.repositories.document_repository import DocumentRepository
from app.infrastructure.db.repositories.application_repository import (
    ApplicationRepository,
)
from app.infrastructure.db.repositories.phase_metadata_repository import (
    PhaseMetadataRepository,
)
from app.infrastructure.db.repositories.activity_repository import ActivityRepository


__all__ = [
    # Base
    "BaseRepository",
    "IReadRepository",
    "IWriteRepository",
    # Repositories
    "StudentRepository",
    "CountryProfileRepository",
    "DocumentRepository",
    "ApplicationRepository",
    "PhaseMetadataRepository",
    "ActivityRepository",
]
