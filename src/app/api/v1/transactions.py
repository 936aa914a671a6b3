"""Transaction endpoints: list, balance, create and CSV import."""

import logging
from uuid import uuid4

from fastapi import APIRouter, Depends, Request, status

from app.api.deps import get_import_service, get_transaction_service
from app.config import settings
from app.core.exceptions import UploadError
from app.schemas.transaction import (
    BalanceResponse,
    MoneyMeta,
    TransactionCreateRequest,
    TransactionImportResult,
    TransactionListResult,
    TransactionResponse,
)
from app.services.importer import TransactionImportService
from app.services.transaction import TransactionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])

CSV_CONTENT_TYPES = {"text/csv", "application/csv"}


def _money_meta() -> MoneyMeta:
    return MoneyMeta(currency=settings.currency, minor_unit=settings.currency_minor_unit)


@router.get(
    "",
    response_model=TransactionListResult,
    summary="List transactions with balance",
)
async def list_transactions(
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionListResult:
    """List every transaction (oldest first) and the derived balance."""
    transactions, balance = await service.list_transactions()
    return TransactionListResult(
        transactions=[TransactionResponse.model_validate(txn) for txn in transactions],
        balance=BalanceResponse.model_validate(balance),
        money=_money_meta(),
    )


@router.get(
    "/balance",
    response_model=BalanceResponse,
    summary="Get current balance",
)
async def get_balance(
    service: TransactionService = Depends(get_transaction_service),
) -> BalanceResponse:
    """Income, outcome and total, in minor units."""
    balance = await service.get_balance()
    return BalanceResponse.model_validate(balance)


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a transaction",
    description="""
    Register a single income or outcome.

    ## Error Codes
    - TXN_001: Invalid type
    - TXN_002: Outcome exceeds current balance
    - VAL_001: Malformed request body
    """,
)
async def create_transaction(
    payload: TransactionCreateRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """
    Create a transaction, creating its category on first use.

    Args:
        payload: Transaction data
        service: Transaction service

    Returns:
        The created transaction
    """
    transaction = await service.create_transaction(
        title=payload.title,
        value=payload.value,
        transaction_type=payload.type,
        category_title=payload.category,
    )
    return TransactionResponse.model_validate(transaction)


@router.post(
    "/import",
    response_model=TransactionImportResult,
    status_code=status.HTTP_201_CREATED,
    summary="Import transactions from CSV",
    description="""
    Import transactions from a CSV file sent as the raw request body
    (`Content-Type: text/csv`).

    ## File Format
    - Header row first (skipped)
    - Columns: `title, type, value, category`
    - `value` in major units (e.g., `20.50`)
    - Rows with blank fields, unknown type or invalid value are skipped

    Imports do not check the balance.

    ## Error Codes
    - API_001: Invalid content type
    - API_002: File too large
    - API_003: Empty file
    - API_004: File is not UTF-8 text
    """,
)
async def import_transactions(
    request: Request,
    service: TransactionImportService = Depends(get_import_service),
) -> TransactionImportResult:
    """
    Store the uploaded CSV in the upload folder and import it.

    The import service deletes the file once the transactions are saved.

    Args:
        request: Incoming request carrying the CSV body
        service: CSV import service

    Returns:
        Imported transactions in file row order
    """
    content_type = (request.headers.get("content-type") or "").split(";")[0].strip()
    if content_type.lower() not in CSV_CONTENT_TYPES:
        raise UploadError("API_001", {"content_type": content_type})

    # Read body in-memory with a strict size cap.
    max_bytes = settings.import_max_size_mb * 1024 * 1024
    buf = bytearray()
    async for chunk in request.stream():
        if not chunk:
            continue
        if len(buf) + len(chunk) > max_bytes:
            raise UploadError("API_002", {"max_bytes": max_bytes})
        buf.extend(chunk)

    if not buf:
        raise UploadError("API_003")

    # The importer reads the file as UTF-8; reject anything else before it
    # reaches the upload folder.
    try:
        bytes(buf).decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise UploadError("API_004", {"position": e.start}) from e

    service.upload_folder.mkdir(parents=True, exist_ok=True)
    file_name = f"{uuid4().hex}.csv"
    (service.upload_folder / file_name).write_bytes(bytes(buf))
    logger.info("CSV upload stored", extra={"file_name": file_name})

    transactions = await service.import_file(file_name)
    return TransactionImportResult(
        transactions=[TransactionResponse.model_validate(txn) for txn in transactions],
        imported_count=len(transactions),
        money=_money_meta(),
    )
