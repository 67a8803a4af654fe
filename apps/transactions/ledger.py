"""
Ledger Module
=============

Pure balance derivation over a customer's transaction history.

A customer's ledger is a set of ``borrowed`` and ``paid`` entries, each
carrying a positive amount. The signed balance is::

    balance = sum(borrowed amounts) - sum(paid amounts)

A positive balance is money owed to the shopkeeper; a negative balance
means the customer has overpaid.

The most recent payment is the ``paid`` entry with the greatest
``created_at``. Entries sharing a timestamp are ordered by id, so the
result does not depend on the order the entries arrive in.

Example:
    Summarising a customer's ledger::

        from apps.transactions.ledger import compute_balance

        summary = compute_balance(person.transactions.all())
        summary['balance']           # Decimal('-120.00')
        summary['last_paid_amount']  # Decimal('50.00')

Note:
    This module never touches the database. It accepts any iterable of
    objects exposing ``id``, ``kind``, ``amount`` and ``created_at``.
"""

from decimal import Decimal

BORROWED = 'borrowed'
PAID = 'paid'

ZERO = Decimal('0')


def _as_decimal(amount):
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def _payment_order_key(transaction):
    return (transaction.created_at, str(transaction.id))


def compute_balance(transactions):
    """
    Fold a transaction history into a balance summary.

    Args:
        transactions (Iterable): Ledger entries with ``id``, ``kind``,
            ``amount`` and ``created_at`` attributes. Not modified.

    Returns:
        dict: A dictionary containing:
            - balance (Decimal): borrowed minus paid.
            - last_paid_date (datetime | None): timestamp of the latest payment.
            - last_paid_amount (Decimal | None): amount of the latest payment.
            - total_borrowed (Decimal): sum of borrowed amounts.
            - total_paid (Decimal): sum of paid amounts.

    Raises:
        ValueError: If an entry has an unknown kind.

    Example:
        >>> summary = compute_balance([])
        >>> summary['balance'], summary['last_paid_date']
        (Decimal('0'), None)
    """
    total_borrowed = ZERO
    total_paid = ZERO
    last_payment = None

    for transaction in transactions:
        amount = _as_decimal(transaction.amount)

        if transaction.kind == BORROWED:
            total_borrowed += amount
        elif transaction.kind == PAID:
            total_paid += amount
            if last_payment is None or (
                _payment_order_key(transaction) > _payment_order_key(last_payment)
            ):
                last_payment = transaction
        else:
            raise ValueError(f"Unknown transaction kind: {transaction.kind!r}")

    return {
        'balance': total_borrowed - total_paid,
        'last_paid_date': last_payment.created_at if last_payment else None,
        'last_paid_amount': _as_decimal(last_payment.amount) if last_payment else None,
        'total_borrowed': total_borrowed,
        'total_paid': total_paid,
    }
