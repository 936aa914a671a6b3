"""Custom exception classes for ledger operations.

Every exception carries an error_code that maps to the error catalog in
errors.py, plus an HTTP status used by the API error handlers.
"""

from typing import Any


class LedgerError(Exception):
    """Base exception for all ledger errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "TXN_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int = 500,
    ):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py
            details: Additional error context (not shown to users)
            http_status: HTTP status code (default: 500)
        """
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        super().__init__(error_code)


class ValidationError(LedgerError):
    """Raised when a transaction request breaks a domain rule.

    This includes:
    - Unknown transaction type (TXN_001)
    - Blank title (TXN_003)
    - Negative or out-of-range value (TXN_004)
    - Blank category title (TXN_005)
    """

    def __init__(self, error_code: str, details: dict[str, Any] | None = None):
        super().__init__(error_code, details, http_status=400)


class InsufficientBalanceError(LedgerError):
    """Raised when an outcome exceeds the current balance (TXN_002)."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("TXN_002", details, http_status=400)


class PersistenceError(LedgerError):
    """Raised when the store fails to persist or read ledger rows (DB_001).

    The session has already been rolled back when this is raised.
    """

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("DB_001", details, http_status=500)


class UploadError(LedgerError):
    """Raised when an uploaded import file is rejected before parsing."""

    def __init__(self, error_code: str, details: dict[str, Any] | None = None):
        super().__init__(error_code, details, http_status=400)
