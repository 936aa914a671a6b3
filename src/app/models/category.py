"""Category model; transactions reference categories by id."""
from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


TITLE_MAX_LENGTH = 100


class Category(BaseModel):
    """Category identified by its exact, case-sensitive title."""

    __tablename__ = "categories"

    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)

    __table_args__ = (UniqueConstraint("title", name="uq_categories_title"),)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, title={self.title})>"
