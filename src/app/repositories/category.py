"""Category repository with title lookups."""
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.category import Category
from app.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Category)

    async def find_by_title(self, title: str) -> Category | None:
        """Get the category with exactly this title."""
        result = await self.db.execute(select(Category).where(Category.title == title))
        return result.scalar_one_or_none()

    async def find_by_titles(self, titles: Iterable[str]) -> list[Category]:
        """Get every existing category whose title is in ``titles`` (one query)."""
        titles = list(titles)
        if not titles:
            return []
        result = await self.db.execute(
            select(Category).where(Category.title.in_(titles))
        )
        return list(result.scalars().all())
