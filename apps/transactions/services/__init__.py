"""
Transactions app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    TransactionsServiceError,
    TransactionNotFoundError,
    InvalidTransactionError,
)

from .transaction_management import (
    get_transactions_for_owner,
    get_transaction_by_id,
    create_transaction,
    update_transaction,
    delete_transaction,
)


__all__ = [
    # Exceptions
    'TransactionsServiceError',
    'TransactionNotFoundError',
    'InvalidTransactionError',

    # Transaction Management
    'get_transactions_for_owner',
    'get_transaction_by_id',
    'create_transaction',
    'update_transaction',
    'delete_transaction',
]
