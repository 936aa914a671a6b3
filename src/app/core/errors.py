"""Error codes and user-friendly messages.

This module defines the error catalog for ledger operations.
Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

ERROR_CATALOG: dict[str, dict] = {
    "TXN_001": {
        "code": "TXN_001",
        "message": "Invalid transaction type",
        "user_message": "This type is invalid.",
        "suggestion": "Use either 'income' or 'outcome'.",
        "retry_allowed": False,
    },
    "TXN_002": {
        "code": "TXN_002",
        "message": "Outcome value exceeds current balance",
        "user_message": "You don't have enough balance to complete the transaction.",
        "suggestion": "Register an income first or lower the value.",
        "retry_allowed": False,
    },
    "TXN_003": {
        "code": "TXN_003",
        "message": "Transaction title is blank",
        "user_message": "A transaction needs a title.",
        "suggestion": "Please provide a non-empty title.",
        "retry_allowed": False,
    },
    "TXN_004": {
        "code": "TXN_004",
        "message": "Transaction value is negative or out of range",
        "user_message": "The value cannot be negative or this large.",
        "suggestion": "Use the 'outcome' type for money going out.",
        "retry_allowed": False,
    },
    "TXN_005": {
        "code": "TXN_005",
        "message": "Category title is blank",
        "user_message": "A transaction needs a category.",
        "suggestion": "Please provide a non-empty category title.",
        "retry_allowed": False,
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Database operation failed",
        "user_message": "We couldn't save your data due to a database error.",
        "suggestion": "Please try again in a few moments.",
        "retry_allowed": True,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "Invalid input data",
        "suggestion": "Please check your input and try again",
        "retry_allowed": True,
    },
    # Import upload errors
    "API_001": {
        "code": "API_001",
        "message": "Invalid file type uploaded",
        "user_message": "Only CSV files can be imported.",
        "suggestion": "Send the file as 'text/csv'.",
        "retry_allowed": False,
    },
    "API_002": {
        "code": "API_002",
        "message": "File size exceeds maximum limit",
        "user_message": "The file is too large.",
        "suggestion": "Split the file into smaller imports.",
        "retry_allowed": False,
    },
    "API_003": {
        "code": "API_003",
        "message": "Empty upload",
        "user_message": "The uploaded file is empty.",
        "suggestion": "Please upload a CSV with a header row and at least one transaction.",
        "retry_allowed": False,
    },
    "API_004": {
        "code": "API_004",
        "message": "Upload is not valid UTF-8 text",
        "user_message": "The uploaded file could not be read as text.",
        "suggestion": "Save the CSV with UTF-8 encoding and try again.",
        "retry_allowed": False,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Unknown codes resolve to a generic definition instead of raising.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]