"""
Base Repository for the Application Phase Tracker

Generic async repository shared by every table. Writes flush but never
commit; the session owner (the request dependency) commits
so that a phase decision and its persistence land in one transaction.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Sequence, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel


ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=SQLModel)


class IReadRepository(ABC, Generic[ModelType]):
    """Read side of a repository."""

    @abstractmethod
    async def get_by_id(self, id: UUID) -> Optional[ModelType]:
        pass

    @abstractmethod
    async def get_for_update(self, id: UUID) -> Optional[ModelType]:
        pass


class IWriteRepository(ABC, Generic[ModelType, CreateSchemaType]):
    """Write side of a repository."""

    @abstractmethod
    async def save(self, obj: ModelType) -> ModelType:
        pass


class BaseRepository(
    IReadRepository[ModelType],
    IWriteRepository[ModelType, CreateSchemaType],
    Generic[ModelType, CreateSchemaType]
):
    """
    Generic async repository.

    Args:
        model: The SQLModel table class to operate on
        session: Async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self._model = model
        self._session = session

    async def get_by_id(self, id: UUID) -> Optional[ModelType]:
        return await self._session.get(self._model, id)

    async def get_for_update(self, id: UUID) -> Optional[ModelType]:
        """
        Load a row and hold a row lock until the transaction ends.

        Used by phase changes so two concurrent requests cannot both
        validate against the same stale state.
        """
        stmt = select(self._model).where(self._model.id == id).with_for_update()
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def save(self, obj: ModelType) -> ModelType:
        """Add ``obj`` to the session and flush it."""
        self._session.add(obj)
        await self._session.flush()
        await self._session.refresh(obj)
        return obj

    async def save_all(self, objects: Sequence[ModelType]) -> List[ModelType]:
        self._session.add_all(list(objects))
        await self._session.flush()
        return list(objects)
