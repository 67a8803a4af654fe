"""
Transaction management service.

Every write locks the person row, changes the ledger and refreshes the
person's last-payment cache inside one database transaction, so the cache
always matches the committed ledger.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.people.models import Person
from apps.people.services import get_person_by_id
from apps.transactions.models import Transaction, TransactionKind
from apps.transactions.patches import TransactionPatch

from .exceptions import (
    TransactionNotFoundError,
    InvalidTransactionError,
)

logger = logging.getLogger(__name__)


def _validate_kind(kind: str) -> str:
    if kind not in TransactionKind.values:
        raise InvalidTransactionError(f"Unknown transaction kind: {kind}")
    return kind


def _validate_amount(amount) -> Decimal:
    try:
        amount = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise InvalidTransactionError(f"Invalid amount: {amount}")

    if not amount.is_finite() or amount <= 0:
        raise InvalidTransactionError("Amount must be greater than zero")

    return amount


def _lock_person(person_id) -> Person:
    return Person.objects.select_for_update().get(id=person_id)


def get_transactions_for_owner(
    *,
    owner: User,
    person_id: Optional[UUID] = None
) -> QuerySet[Transaction]:
    """Return the owner's ledger entries, newest first."""
    queryset = Transaction.objects.filter(person__owner=owner).select_related('person')

    if person_id:
        queryset = queryset.filter(person_id=person_id)

    return queryset.order_by('-created_at', '-id')


def get_transaction_by_id(*, transaction_id: UUID, owner: User) -> Transaction:
    """
    Get one of the owner's ledger entries by ID.

    Raises:
        TransactionNotFoundError: If transaction doesn't exist or belongs to another owner
    """
    try:
        return Transaction.objects.select_related('person').get(
            id=transaction_id, person__owner=owner
        )
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError(f"Transaction with ID {transaction_id} not found")


@transaction.atomic
def create_transaction(
    *,
    owner: User,
    person_id: UUID,
    kind: str,
    amount,
    note: str = '',
    created_at=None
) -> Transaction:
    """
    Record a borrowed or paid entry for one of the owner's people.

    Args:
        owner: Authenticated user
        person_id: Person the entry belongs to
        kind: 'borrowed' or 'paid'
        amount: Positive amount
        note: Free text
        created_at: Entry time, defaults to now

    Returns:
        Created Transaction instance

    Raises:
        PersonNotFoundError: If person doesn't exist or belongs to another owner
        InvalidTransactionError: If kind is unknown or amount is not positive
    """
    person = get_person_by_id(person_id=person_id, owner=owner, for_update=True)

    entry = Transaction.objects.create(
        person=person,
        kind=_validate_kind(kind),
        amount=_validate_amount(amount),
        note=note or '',
        created_at=created_at or timezone.now(),
    )

    person.refresh_last_payment()
    logger.info("Recorded %s of %s for person %s", entry.kind, entry.amount, person.id)

    return entry


@transaction.atomic
def update_transaction(
    *,
    owner: User,
    transaction_id: UUID,
    patch: TransactionPatch
) -> Transaction:
    """
    Apply a patch to one of the owner's ledger entries.

    Only fields that differ from the stored entry are written. The person's
    last-payment cache is refreshed whenever something changed.

    Raises:
        TransactionNotFoundError: If transaction doesn't exist or belongs to another owner
        InvalidTransactionError: If the new kind or amount is invalid
    """
    entry = get_transaction_by_id(transaction_id=transaction_id, owner=owner)
    if patch.is_empty():
        return entry

    person = _lock_person(entry.person_id)

    changes = patch.changes(entry)
    if 'kind' in changes:
        changes['kind'] = _validate_kind(changes['kind'])
    if 'amount' in changes:
        changes['amount'] = _validate_amount(changes['amount'])
    if 'note' in changes:
        changes['note'] = changes['note'] or ''
    if 'created_at' in changes and changes['created_at'] is None:
        raise InvalidTransactionError("Transaction time cannot be cleared")

    if changes:
        for field, value in changes.items():
            setattr(entry, field, value)
        entry.save(update_fields=list(changes) + ['updated_at'])

        person.refresh_last_payment()
        logger.info("Updated transaction %s fields %s", entry.id, sorted(changes))

    entry.person = person
    return entry


@transaction.atomic
def delete_transaction(*, owner: User, transaction_id: UUID) -> Person:
    """
    Delete one of the owner's ledger entries.

    Returns:
        The entry's person with its refreshed last-payment cache

    Raises:
        TransactionNotFoundError: If transaction doesn't exist or belongs to another owner
    """
    entry = get_transaction_by_id(transaction_id=transaction_id, owner=owner)
    person = _lock_person(entry.person_id)

    entry_id = entry.id
    entry.delete()
    person.refresh_last_payment()

    logger.info("Deleted transaction %s from person %s", entry_id, person.id)

    return person
