"""
Country Profile Repository

Queries over per-country application tracks. Countries are stored
normalized, so lookups normalize their input first.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.workflow.countries import normalize_country
from app.infrastructure.db.models.country_profile import (
    CountryProfileCreate,
    StudentCountryProfile,
)
from app.infrastructure.db.repositories.base_repository import BaseRepository


class CountryProfileRepository(BaseRepository[StudentCountryProfile, CountryProfileCreate]):
    """Repository for student country profiles."""

    def __init__(self, session: AsyncSession):
        super().__init__(StudentCountryProfile, session)

    async def get_by_student(self, student_id: UUID) -> List[StudentCountryProfile]:
        """All tracks of a student, preferred and best-ranked first."""
        stmt = (
            select(StudentCountryProfile)
            .where(StudentCountryProfile.student_id == student_id)
            .order_by(
                StudentCountryProfile.preferred_country.desc(),
                StudentCountryProfile.country_ranking,
                StudentCountryProfile.created_at,
            )
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_student_and_country(
        self,
        student_id: UUID,
        country: str,
        for_update: bool = False,
    ) -> Optional[StudentCountryProfile]:
        """
        Get one track.

        Args:
            student_id: Student UUID
            country: Country in any alias form
            for_update: Hold a row lock until the transaction ends
        """
        stmt = select(StudentCountryProfile).where(
            StudentCountryProfile.student_id == student_id,
            StudentCountryProfile.country == normalize_country(country),
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def list_all(self) -> List[StudentCountryProfile]:
        stmt = select(StudentCountryProfile).order_by(
            StudentCountryProfile.student_id,
            StudentCountryProfile.created_at,
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
