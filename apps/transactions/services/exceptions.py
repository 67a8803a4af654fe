"""
Domain-specific exceptions for transactions app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class TransactionsServiceError(Exception):
    """Base exception for all transactions service errors."""
    pass


class TransactionNotFoundError(TransactionsServiceError):
    """Raised when a transaction does not exist or belongs to another owner."""
    pass


class InvalidTransactionError(TransactionsServiceError):
    """Raised when a ledger entry violates business rules."""
    pass
