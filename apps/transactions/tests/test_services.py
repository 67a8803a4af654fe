"""
Service layer unit tests for transactions app.

Tests cover:
- Last-payment cache refresh on create, update and delete
- Owner scoping
- Amount and kind validation
"""

import pytest
from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

from apps.people.models import Person
from apps.people.services import PersonNotFoundError
from apps.transactions.models import Transaction, TransactionKind
from apps.transactions.patches import TransactionPatch
from apps.transactions.services import (
    create_transaction,
    update_transaction,
    delete_transaction,
    get_transactions_for_owner,
)
from apps.transactions.services.exceptions import (
    TransactionNotFoundError,
    InvalidTransactionError,
)


@pytest.mark.django_db
class TestCreateTransaction:

    def test_borrowed_leaves_cache_empty(self, owner, person):
        create_transaction(owner=owner, person_id=person.id, kind='borrowed', amount=Decimal('25.00'))

        person.refresh_from_db()
        assert person.last_paid_date is None
        assert person.last_paid_amount is None

    def test_paid_updates_cache(self, owner, person):
        entry = create_transaction(owner=owner, person_id=person.id, kind='paid', amount='40')

        person.refresh_from_db()
        assert person.last_paid_date == entry.created_at
        assert person.last_paid_amount == Decimal('40.00')

    def test_backdated_payment_does_not_replace_latest(self, owner, person_with_ledger, base_time):
        create_transaction(
            owner=owner,
            person_id=person_with_ledger.id,
            kind='paid',
            amount='999',
            created_at=base_time,
        )

        person_with_ledger.refresh_from_db()
        assert person_with_ledger.last_paid_amount == Decimal('50.00')

    def test_zero_amount_rejected(self, owner, person):
        with pytest.raises(InvalidTransactionError):
            create_transaction(owner=owner, person_id=person.id, kind='paid', amount='0')

        assert not Transaction.objects.exists()

    def test_negative_amount_rejected(self, owner, person):
        with pytest.raises(InvalidTransactionError):
            create_transaction(owner=owner, person_id=person.id, kind='borrowed', amount='-5')

    def test_unknown_kind_rejected(self, owner, person):
        with pytest.raises(InvalidTransactionError):
            create_transaction(owner=owner, person_id=person.id, kind='refund', amount='5')

    def test_other_owner_person(self, other_owner, person):
        with pytest.raises(PersonNotFoundError):
            create_transaction(owner=other_owner, person_id=person.id, kind='paid', amount='5')

        assert not Transaction.objects.exists()


@pytest.mark.django_db
class TestUpdateTransaction:

    def test_change_amount_of_latest_payment(self, owner, person_with_ledger):
        latest = person_with_ledger.transactions.get(amount=Decimal('50.00'))

        update_transaction(
            owner=owner,
            transaction_id=latest.id,
            patch=TransactionPatch(amount=Decimal('75.00')),
        )

        person_with_ledger.refresh_from_db()
        assert person_with_ledger.last_paid_amount == Decimal('75.00')

    def test_change_kind_moves_cache(self, owner, person_with_ledger):
        """Turning the latest payment into a borrow falls back to the earlier one."""
        latest = person_with_ledger.transactions.get(amount=Decimal('50.00'))

        update_transaction(
            owner=owner,
            transaction_id=latest.id,
            patch=TransactionPatch(kind=TransactionKind.BORROWED),
        )

        person_with_ledger.refresh_from_db()
        assert person_with_ledger.last_paid_amount == Decimal('100.00')

    def test_empty_patch_writes_nothing(self, owner, person_with_ledger):
        entry = person_with_ledger.transactions.first()
        updated_at = entry.updated_at
        assert TransactionPatch().is_empty()
        assert not TransactionPatch(note='').is_empty()

        result = update_transaction(owner=owner, transaction_id=entry.id, patch=TransactionPatch())

        entry.refresh_from_db()
        assert entry.updated_at == updated_at
        assert result.id == entry.id

    def test_unchanged_fields_are_not_written(self, owner, person_with_ledger):
        entry = person_with_ledger.transactions.get(amount=Decimal('30.00'))

        patch = TransactionPatch(amount=Decimal('30'), note='tea and sugar')
        assert patch.changes(entry) == {'note': 'tea and sugar'}

        update_transaction(owner=owner, transaction_id=entry.id, patch=patch)

        entry.refresh_from_db()
        assert entry.note == 'tea and sugar'
        assert entry.amount == Decimal('30.00')

    def test_invalid_amount(self, owner, person_with_ledger):
        entry = person_with_ledger.transactions.first()

        with pytest.raises(InvalidTransactionError):
            update_transaction(
                owner=owner,
                transaction_id=entry.id,
                patch=TransactionPatch(amount=Decimal('0')),
            )

    def test_other_owner(self, other_owner, person_with_ledger):
        entry = person_with_ledger.transactions.first()

        with pytest.raises(TransactionNotFoundError):
            update_transaction(
                owner=other_owner,
                transaction_id=entry.id,
                patch=TransactionPatch(note='hijack'),
            )


@pytest.mark.django_db
class TestDeleteTransaction:

    def test_deleting_only_payment_clears_cache(self, owner, person, make_transaction):
        payment = make_transaction(TransactionKind.PAID, '60.00', days=1)
        person.refresh_last_payment()

        delete_transaction(owner=owner, transaction_id=payment.id)

        person.refresh_from_db()
        assert person.last_paid_date is None
        assert person.last_paid_amount is None

    def test_deleting_one_of_two_payments_keeps_other(self, owner, person_with_ledger, base_time):
        latest = person_with_ledger.transactions.get(amount=Decimal('50.00'))

        delete_transaction(owner=owner, transaction_id=latest.id)

        person_with_ledger.refresh_from_db()
        assert person_with_ledger.last_paid_amount == Decimal('100.00')
        assert person_with_ledger.last_paid_date == base_time + timedelta(days=1)

    def test_returns_refreshed_person(self, owner, person_with_ledger):
        borrowed = person_with_ledger.transactions.get(kind=TransactionKind.BORROWED)

        person = delete_transaction(owner=owner, transaction_id=borrowed.id)

        assert person.id == person_with_ledger.id
        assert person.last_paid_amount == Decimal('50.00')

    def test_unknown_transaction(self, owner):
        with pytest.raises(TransactionNotFoundError):
            delete_transaction(owner=owner, transaction_id=uuid4())


@pytest.mark.django_db
class TestTransactionQueries:

    def test_newest_first(self, owner, person_with_ledger):
        amounts = [entry.amount for entry in get_transactions_for_owner(owner=owner)]

        assert amounts == [Decimal('30.00'), Decimal('50.00'), Decimal('100.00')]

    def test_scoped_to_owner(self, other_owner, person_with_ledger):
        assert not get_transactions_for_owner(owner=other_owner).exists()

    def test_filter_by_person(self, owner, person_with_ledger, make_transaction):
        second = Person.objects.create(name='Meena', owner=owner)
        make_transaction(TransactionKind.BORROWED, '5.00', target=second)

        entries = get_transactions_for_owner(owner=owner, person_id=second.id)

        assert [entry.person_id for entry in entries] == [second.id]
