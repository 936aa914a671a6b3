"""Pydantic schemas for transaction API requests and responses."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.category import TITLE_MAX_LENGTH as CATEGORY_TITLE_MAX_LENGTH
from app.models.transaction import TITLE_MAX_LENGTH, VALUE_MAX, TransactionType


class MoneyMeta(BaseModel):
    """Metadata describing how monetary amounts are represented."""

    currency: str = Field(description="ISO currency code (e.g., BRL)")
    minor_unit: int = Field(
        description="Number of decimal places for the currency (e.g., 2 for cents)"
    )


class TransactionCreateRequest(BaseModel):
    """Request to register a single transaction."""

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH, description="Transaction title")
    value: int = Field(ge=0, le=VALUE_MAX, description="Amount in currency minor units (e.g., cents)")
    type: TransactionType = Field(description="'income' or 'outcome'")
    category: str = Field(
        min_length=1,
        max_length=CATEGORY_TITLE_MAX_LENGTH,
        description="Category title, created if missing",
    )


class CategoryResponse(BaseModel):
    """Category data for API responses."""

    id: UUID
    title: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TransactionResponse(BaseModel):
    """Transaction data for API responses."""

    id: UUID
    title: str
    value: int = Field(description="Amount in currency minor units")
    type: TransactionType
    category_id: UUID
    category: CategoryResponse
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BalanceResponse(BaseModel):
    """Ledger balance derived from all transactions (minor units)."""

    income: int
    outcome: int
    total: int

    model_config = ConfigDict(from_attributes=True)


class TransactionListResult(BaseModel):
    """All transactions with the current balance."""

    transactions: list[TransactionResponse]
    balance: BalanceResponse
    money: MoneyMeta


class TransactionImportResult(BaseModel):
    """Transactions created by a CSV import, in file row order."""

    transactions: list[TransactionResponse]
    imported_count: int = Field(description="Number of rows persisted")
    money: MoneyMeta
