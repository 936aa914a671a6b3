"""Transaction creation and ledger queries.

Creating a transaction:
1. Fetch the current balance
2. Validate the type (and title, category title, value)
3. Reject outcomes larger than the balance
4. Resolve (get-or-create) the category
5. Persist the transaction

The balance check is check-then-act: two concurrent outcomes can both read
the same balance and jointly overdraw the ledger. A category created in step
4 is kept even if step 5 fails.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import (
    InsufficientBalanceError,
    LedgerError,
    PersistenceError,
    ValidationError,
)
from app.models.transaction import VALUE_MAX, Transaction, TransactionType
from app.repositories.transaction import Balance, TransactionRepository
from app.services.category import CategoryResolver

logger = logging.getLogger(__name__)


class TransactionService:
    """Service layer for creating and listing ledger transactions."""

    def __init__(self, db: AsyncSession):
        """Initialize the service.

        Args:
            db: Database session for persistence
        """
        self.db = db
        self.transaction_repo = TransactionRepository(db)
        self.category_resolver = CategoryResolver(db)

    async def create_transaction(
        self,
        title: str,
        value: int,
        transaction_type: TransactionType | str,
        category_title: str,
    ) -> Transaction:
        """Validate and persist a single transaction.

        Args:
            title: Transaction title (non-empty)
            value: Amount in currency minor units (0 to VALUE_MAX)
            transaction_type: "income" or "outcome"
            category_title: Category title, created if it does not exist

        Returns:
            The persisted Transaction

        Raises:
            ValidationError: If type, title, category title or value is invalid
            InsufficientBalanceError: If an outcome exceeds the balance
            PersistenceError: If the store fails
        """
        try:
            balance = await self.transaction_repo.get_balance()

            try:
                txn_type = TransactionType(transaction_type)
            except ValueError as e:
                logger.warning("Rejected transaction with invalid type", extra={"error_code": "TXN_001"})
                raise ValidationError("TXN_001", {"type": str(transaction_type)}) from e

            if not title or not title.strip():
                raise ValidationError("TXN_003", {"field": "title"})

            if not category_title or not category_title.strip():
                raise ValidationError("TXN_005", {"field": "category"})

            if value < 0 or value > VALUE_MAX:
                raise ValidationError("TXN_004", {"value": value})

            if txn_type is TransactionType.OUTCOME and value > balance.total:
                logger.info(
                    "Rejected outcome exceeding balance",
                    extra={"error_code": "TXN_002"},
                )
                raise InsufficientBalanceError({"value": value, "balance": balance.total})

            category = await self.category_resolver.resolve(category_title)

            transaction = await self.transaction_repo.create(
                Transaction(
                    title=title,
                    value=value,
                    type=txn_type,
                    category=category,
                )
            )
            logger.info("Transaction created", extra={"transactions_count": 1})
            return transaction

        except LedgerError:
            raise
        except SQLAlchemyError as e:
            if settings.debug:
                logger.exception("Transaction persistence failed", extra={"error_type": type(e).__name__})
            else:
                logger.error("Transaction persistence failed", extra={"error_type": type(e).__name__})
            await self.db.rollback()
            raise PersistenceError({"operation": "create_transaction"}) from e

    async def get_balance(self) -> Balance:
        """Get the current ledger balance."""
        return await self.transaction_repo.get_balance()

    async def list_transactions(self) -> tuple[list[Transaction], Balance]:
        """Get every transaction (oldest first) together with the balance."""
        transactions = await self.transaction_repo.get_all_ordered()
        balance = await self.transaction_repo.get_balance()
        return transactions, balance
