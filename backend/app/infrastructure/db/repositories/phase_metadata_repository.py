"""
Phase Metadata Repository

Reads and writes the per-phase reopen bookkeeping of one country track.
"""

from typing import Dict, List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.workflow.interfaces import PhaseMetadataState
from app.infrastructure.db.models.phase_metadata import PhaseMetadata
from app.infrastructure.db.repositories.base_repository import BaseRepository


class PhaseMetadataRepository(BaseRepository[PhaseMetadata, PhaseMetadata]):
    """Repository for phase metadata rows."""

    def __init__(self, session: AsyncSession):
        super().__init__(PhaseMetadata, session)

    async def get_for_track(
        self,
        student_id: UUID,
        country: str,
    ) -> Dict[str, PhaseMetadata]:
        """Rows of one track keyed by phase name."""
        stmt = select(PhaseMetadata).where(
            PhaseMetadata.student_id == student_id,
            PhaseMetadata.country == country,
        )
        result = await self._session.execute(stmt)
        return {row.phase_name: row for row in result.scalars().all()}

    async def write_states(
        self,
        student_id: UUID,
        country: str,
        states: List[PhaseMetadataState],
    ) -> List[PhaseMetadata]:
        """Insert or update one row per state."""
        existing = await self.get_for_track(student_id, country)
        rows = []
        for state in states:
            row = existing.get(state.phase)
            if row is None:
                row = PhaseMetadata(
                    student_id=student_id,
                    country=country,
                    phase_name=state.phase,
                )
            row.apply_state(state)
            rows.append(row)
        return await self.save_all(rows)
