"""Database models."""
from app.models.category import Category
from app.models.transaction import Transaction, TransactionType

__all__ = ["Category", "Transaction", "TransactionType"]
