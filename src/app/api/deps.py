"""FastAPI dependency injection for services and database."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.db.session import get_db
from app.services.importer import TransactionImportService
from app.services.transaction import TransactionService


async def get_transaction_service(
    db: AsyncSession = Depends(get_db),
) -> TransactionService:
    """
    Get transaction service instance.

    Args:
        db: Database session

    Returns:
        TransactionService instance
    """
    return TransactionService(db)


async def get_import_service(
    db: AsyncSession = Depends(get_db),
) -> TransactionImportService:
    """
    Get CSV import service bound to the configured upload folder.

    Args:
        db: Database session

    Returns:
        TransactionImportService instance
    """
    return TransactionImportService(db, upload_folder=settings.upload_folder)
