"""
Document Repository
"""

from collections import defaultdict
from typing import Dict, List, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.db.models.document import Document
from app.infrastructure.db.repositories.base_repository import BaseRepository


class DocumentRepository(BaseRepository[Document, Document]):
    """Repository for student documents."""

    def __init__(self, session: AsyncSession):
        super().__init__(Document, session)

    async def get_by_student(self, student_id: UUID) -> List[Document]:
        stmt = (
            select(Document)
            .where(Document.student_id == student_id)
            .order_by(Document.created_at)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_students(
        self,
        student_ids: Sequence[UUID],
    ) -> Dict[UUID, List[Document]]:
        """Documents grouped by student, in one query."""
        grouped: Dict[UUID, List[Document]] = defaultdict(list)
        if not student_ids:
            return grouped
        stmt = select(Document).where(Document.student_id.in_(list(student_ids)))
        result = await self._session.execute(stmt)
        for document in result.scalars().all():
            grouped[document.student_id].append(document)
        return grouped
