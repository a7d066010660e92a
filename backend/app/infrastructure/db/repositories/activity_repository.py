"""
Activity Repository

Extends BaseRepository with activity-log helpers.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.workflow.interfaces import ActivityEntry
from app.infrastructure.db.models.activity import Activity
from app.infrastructure.db.repositories.base_repository import BaseRepository


class ActivityRepository(BaseRepository[Activity, Activity]):
    """Repository for the activity log."""

    def __init__(self, session: AsyncSession):
        super().__init__(Activity, session)

    async def log(
        self,
        entry: ActivityEntry,
        student_id: UUID,
        actor_id: Optional[UUID] = None,
        country: Optional[str] = None,
    ) -> Activity:
        """Persist an activity descriptor produced by the workflow rules."""
        activity = Activity.from_entry(entry, student_id, actor_id, country)
        return await self.save(activity)

    async def get_by_student(self, student_id: UUID, limit: int = 100) -> List[Activity]:
        stmt = (
            select(Activity)
            .where(Activity.student_id == student_id)
            .order_by(Activity.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
