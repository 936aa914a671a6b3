"""Transaction model representing a single ledger entry."""
import enum
from uuid import UUID

from sqlalchemy import BigInteger, CheckConstraint, Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel


TITLE_MAX_LENGTH = 255
# Upper bound of the BigInteger value column
VALUE_MAX = 2**63 - 1


class TransactionType(str, enum.Enum):
    """Direction of a transaction relative to the balance."""

    INCOME = "income"
    OUTCOME = "outcome"


class Transaction(BaseModel):
    """Ledger transaction. ``value`` is stored in currency minor units."""

    __tablename__ = "transactions"

    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    value: Mapped[int] = mapped_column(BigInteger, nullable=False)
    type: Mapped[TransactionType] = mapped_column(
        Enum(
            TransactionType,
            name="transaction_type",
            values_callable=lambda members: [m.value for m in members],
            validate_strings=True,
        ),
        nullable=False,
        index=True,
    )
    category_id: Mapped[UUID] = mapped_column(
        ForeignKey("categories.id"), nullable=False, index=True
    )

    __table_args__ = (
        CheckConstraint("value >= 0", name="ck_transactions_value_non_negative"),
    )

    # Relationships
    category: Mapped["Category"] = relationship(
        "Category", lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, type={self.type.value}, value={self.value})>"
