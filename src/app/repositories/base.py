"""Base repository with generic create operations."""
from typing import Generic, Sequence, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Generic repository providing create operations for any model.

    Ledger rows are append-only, so no update or delete is exposed.
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        self.db = db
        self.model = model

    async def create(self, obj: T) -> T:
        """Create a new record."""
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def create_many(self, objs: Sequence[T]) -> list[T]:
        """Create several records in a single commit.

        Identifiers and timestamps are assigned client-side, so the objects
        are usable after the commit without a refresh per row.
        """
        objs = list(objs)
        if not objs:
            return objs
        self.db.add_all(objs)
        await self.db.commit()
        return objs
