"""Category resolution (get-or-create) for single titles and batches."""

import logging
from typing import Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.category import Category
from app.repositories.category import CategoryRepository

logger = logging.getLogger(__name__)


class CategoryResolver:
    """Resolve category titles to persisted Category rows.

    Uniqueness of titles is enforced by the ``uq_categories_title``
    constraint. When a create loses a race against a concurrent writer the
    resolver rolls back and retries as a lookup.
    """

    def __init__(self, db: AsyncSession):
        """Initialize the resolver.

        Args:
            db: Database session
        """
        self.db = db
        self.category_repo = CategoryRepository(db)

    async def resolve(self, title: str) -> Category:
        """Get or create the category with exactly this title.

        Args:
            title: Category title (case-sensitive)

        Returns:
            Existing or newly created Category
        """
        category = await self.category_repo.find_by_title(title)
        if category is not None:
            return category

        try:
            category = await self.category_repo.create(Category(title=title))
        except IntegrityError:
            await self.db.rollback()
            logger.info("Category created concurrently, retrying as lookup")
            category = await self.category_repo.find_by_title(title)
            if category is None:
                raise
            return category

        logger.info("Category created", extra={"categories_created": 1})
        return category

    async def resolve_many(self, titles: Iterable[str]) -> dict[str, Category]:
        """Resolve many titles with one lookup and one batch insert.

        Args:
            titles: Category titles, duplicates allowed

        Returns:
            Mapping of every distinct requested title to its Category
        """
        distinct = list(dict.fromkeys(titles))
        if not distinct:
            return {}

        try:
            return await self._resolve_distinct(distinct)
        except IntegrityError:
            # Another writer created some of the missing titles; those now
            # show up in the existence query.
            await self.db.rollback()
            logger.info("Categories created concurrently, retrying batch resolution")
            return await self._resolve_distinct(distinct)

    async def _resolve_distinct(self, distinct: list[str]) -> dict[str, Category]:
        existing = await self.category_repo.find_by_titles(distinct)
        resolved = {category.title: category for category in existing}

        missing = [title for title in distinct if title not in resolved]
        created = await self.category_repo.create_many(
            [Category(title=title) for title in missing]
        )
        resolved.update({category.title: category for category in created})

        logger.info("Categories resolved", extra={"categories_created": len(created)})
        return resolved
