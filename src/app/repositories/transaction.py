"""Transaction repository with balance aggregation."""
from dataclasses import dataclass

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.transaction import Transaction, TransactionType
from app.repositories.base import BaseRepository


@dataclass(frozen=True)
class Balance:
    """Ledger totals in minor units; ``total = income - outcome``."""

    income: int
    outcome: int

    @property
    def total(self) -> int:
        return self.income - self.outcome


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for Transaction model with balance queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    async def get_balance(self) -> Balance:
        """
        Fold every persisted transaction into income/outcome sums.
        Computed on each call; nothing is cached.
        """
        income = func.coalesce(
            func.sum(
                case((Transaction.type == TransactionType.INCOME, Transaction.value), else_=0)
            ),
            0,
        )
        outcome = func.coalesce(
            func.sum(
                case((Transaction.type == TransactionType.OUTCOME, Transaction.value), else_=0)
            ),
            0,
        )
        result = await self.db.execute(select(income.label("income"), outcome.label("outcome")))
        row = result.one()
        return Balance(income=int(row.income), outcome=int(row.outcome))

    async def get_all_ordered(self) -> list[Transaction]:
        """Get all transactions, oldest first, with their category loaded."""
        result = await self.db.execute(
            select(Transaction).order_by(Transaction.created_at.asc(), Transaction.id.asc())
        )
        return list(result.scalars().all())