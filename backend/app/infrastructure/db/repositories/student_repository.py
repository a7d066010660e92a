"""
Student Repository

Extends BaseRepository with student lookups.
"""

from typing import List, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.db.models.student import Student, StudentCreate
from app.infrastructure.db.repositories.base_repository import BaseRepository


class StudentRepository(BaseRepository[Student, StudentCreate]):
    """Repository for students."""

    def __init__(self, session: AsyncSession):
        super().__init__(Student, session)

    async def get_many(self, ids: Sequence[UUID]) -> List[Student]:
        if not ids:
            return []
        stmt = select(Student).where(Student.id.in_(list(ids)))
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def set_phase(self, student: Student, phase: str) -> Student:
        """Update the global phase slot."""
        student.current_phase = phase
        return await self.save(student)
