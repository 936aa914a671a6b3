"""CSV import of ledger transactions.

Import workflow:
1. Stream-parse the CSV (header skipped, fields trimmed, incomplete rows dropped)
2. Collect the category title of every accepted row
3. Resolve all categories with one lookup and one batch insert
4. Persist every transaction in one batch
5. Delete the consumed upload

Imports do not check the balance: a file full of outcomes can drive the
balance negative. Only single transaction creation enforces it.
"""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, TextIO

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import PersistenceError
from app.core.money import to_minor_units
from app.models.category import TITLE_MAX_LENGTH as CATEGORY_TITLE_MAX_LENGTH
from app.models.transaction import (
    TITLE_MAX_LENGTH,
    VALUE_MAX,
    Transaction,
    TransactionType,
)
from app.repositories.transaction import TransactionRepository
from app.services.category import CategoryResolver

logger = logging.getLogger(__name__)

# Column order: title, type, value, category
CSV_FIELDS = 4


@dataclass(frozen=True)
class ImportedTransaction:
    """One accepted CSV row, value already in minor units."""

    title: str
    type: TransactionType
    value: int
    category: str


def _parse_row(row: list[str]) -> ImportedTransaction | None:
    if len(row) < CSV_FIELDS:
        return None

    title, type_raw, value_raw, category = (cell.strip() for cell in row[:CSV_FIELDS])
    if not title or not type_raw or not value_raw or not category:
        return None
    if len(title) > TITLE_MAX_LENGTH or len(category) > CATEGORY_TITLE_MAX_LENGTH:
        return None

    try:
        txn_type = TransactionType(type_raw)
        value = to_minor_units(value_raw)
    except ValueError:
        return None
    if value < 0 or value > VALUE_MAX:
        return None

    return ImportedTransaction(title=title, type=txn_type, value=value, category=category)


def parse_rows(stream: Iterable[str]) -> Iterator[ImportedTransaction]:
    """Yield accepted rows from CSV text, skipping the header row.

    Rows with a missing or blank field, an over-length title or category, an
    unknown type, or a value that is not a non-negative number within the
    column range are dropped silently.
    """
    reader = csv.reader(stream)
    next(reader, None)
    for row in reader:
        record = _parse_row(row)
        if record is not None:
            yield record


class TransactionImportService:
    """Service for importing transactions from CSV uploads."""

    def __init__(self, db: AsyncSession, upload_folder: Path):
        """Initialize the service.

        Args:
            db: Database session for persistence
            upload_folder: Directory holding uploaded files awaiting import
        """
        self.db = db
        self.upload_folder = Path(upload_folder)
        self.transaction_repo = TransactionRepository(db)
        self.category_resolver = CategoryResolver(db)

    async def import_file(self, file_name: str) -> list[Transaction]:
        """Import an uploaded CSV file and delete it afterwards.

        The file is only deleted after the batch insert succeeds; on failure
        it is left in place.

        Args:
            file_name: Name of the file inside the upload folder

        Returns:
            Persisted transactions in file row order

        Raises:
            PersistenceError: If categories or transactions cannot be saved
        """
        file_path = self.upload_folder / file_name
        with file_path.open(newline="", encoding="utf-8-sig") as stream:
            records = list(parse_rows(stream))

        transactions = await self._persist(records)
        self._discard(file_path)

        logger.info(
            "CSV import complete",
            extra={"file_name": file_name, "rows_accepted": len(records)},
        )
        return transactions

    async def import_stream(self, stream: TextIO) -> list[Transaction]:
        """Import CSV text from an already open stream.

        Returns:
            Persisted transactions in row order
        """
        records = list(parse_rows(stream))
        transactions = await self._persist(records)
        logger.info("CSV stream import complete", extra={"rows_accepted": len(records)})
        return transactions

    async def _persist(self, records: list[ImportedTransaction]) -> list[Transaction]:
        try:
            categories = await self.category_resolver.resolve_many(
                record.category for record in records
            )
            return await self.transaction_repo.create_many(
                [
                    Transaction(
                        title=record.title,
                        value=record.value,
                        type=record.type,
                        category=categories[record.category],
                    )
                    for record in records
                ]
            )
        except SQLAlchemyError as e:
            if settings.debug:
                logger.exception("CSV import persistence failed", extra={"error_type": type(e).__name__})
            else:
                logger.error("CSV import persistence failed", extra={"error_type": type(e).__name__})
            await self.db.rollback()
            raise PersistenceError({"operation": "import", "rows": len(records)}) from e

    def _discard(self, file_path: Path) -> None:
        try:
            file_path.unlink()
        except OSError:
            logger.warning("Could not delete imported file", extra={"file_name": file_path.name})
