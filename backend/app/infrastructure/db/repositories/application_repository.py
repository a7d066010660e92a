"""
University Application Repository
"""

from collections import defaultdict
from typing import Dict, List, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.db.models.university_application import UniversityApplication
from app.infrastructure.db.repositories.base_repository import BaseRepository


class ApplicationRepository(BaseRepository[UniversityApplication, UniversityApplication]):
    """Repository for university applications."""

    def __init__(self, session: AsyncSession):
        super().__init__(UniversityApplication, session)

    async def get_by_student(self, student_id: UUID) -> List[UniversityApplication]:
        stmt = select(UniversityApplication).where(
            UniversityApplication.student_id == student_id
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_students(
        self,
        student_ids: Sequence[UUID],
    ) -> Dict[UUID, List[UniversityApplication]]:
        """Applications grouped by student, in one query."""
        grouped: Dict[UUID, List[UniversityApplication]] = defaultdict(list)
        if not student_ids:
            return grouped
        stmt = select(UniversityApplication).where(
            UniversityApplication.student_id.in_(list(student_ids))
        )
        result = await self._session.execute(stmt)
        for application in result.scalars().all():
            grouped[application.student_id].append(application)
        return grouped
