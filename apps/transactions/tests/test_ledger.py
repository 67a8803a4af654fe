"""
Unit tests for the ledger reducer.

Entries are unsaved model instances or plain namespaces; nothing here
touches the database.
"""

import random
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from apps.transactions.ledger import compute_balance, BORROWED, PAID
from apps.transactions.models import Transaction

T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def entry(kind, amount, minutes=0, entry_id=None):
    return Transaction(
        id=entry_id or uuid.uuid4(),
        kind=kind,
        amount=Decimal(amount),
        created_at=T0 + timedelta(minutes=minutes),
    )


class TestComputeBalance:

    def test_empty_ledger(self):
        summary = compute_balance([])

        assert summary['balance'] == Decimal('0')
        assert summary['last_paid_date'] is None
        assert summary['last_paid_amount'] is None
        assert summary['total_borrowed'] == Decimal('0')
        assert summary['total_paid'] == Decimal('0')

    def test_only_borrowed(self):
        summary = compute_balance([
            entry(BORROWED, '20.00'),
            entry(BORROWED, '15.50', minutes=5),
        ])

        assert summary['balance'] == Decimal('35.50')
        assert summary['total_borrowed'] == Decimal('35.50')
        assert summary['last_paid_date'] is None
        assert summary['last_paid_amount'] is None

    def test_overpaid_customer(self):
        """Paid 100 then 50, borrowed 30: balance is negative."""
        second_payment = entry(PAID, '50.00', minutes=60)
        summary = compute_balance([
            entry(PAID, '100.00'),
            second_payment,
            entry(BORROWED, '30.00', minutes=120),
        ])

        assert summary['balance'] == Decimal('-120.00')
        assert summary['last_paid_amount'] == Decimal('50.00')
        assert summary['last_paid_date'] == second_payment.created_at
        assert summary['total_paid'] == Decimal('150.00')

    def test_result_independent_of_order(self):
        entries = [
            entry(BORROWED, '10.00', minutes=1),
            entry(PAID, '4.00', minutes=2),
            entry(BORROWED, '7.25', minutes=3),
            entry(PAID, '3.00', minutes=4),
            entry(BORROWED, '1.75', minutes=5),
        ]
        expected = compute_balance(entries)

        shuffled = list(entries)
        random.Random(7).shuffle(shuffled)

        assert compute_balance(shuffled) == expected
        assert compute_balance(list(reversed(entries))) == expected
        assert expected['balance'] == Decimal('12.00')

    def test_equal_timestamps_pick_greatest_id(self):
        low = entry(PAID, '10.00', minutes=30, entry_id=uuid.UUID('00000000-0000-0000-0000-000000000001'))
        high = entry(PAID, '20.00', minutes=30, entry_id=uuid.UUID('ffffffff-0000-0000-0000-000000000001'))

        assert compute_balance([low, high])['last_paid_amount'] == Decimal('20.00')
        assert compute_balance([high, low])['last_paid_amount'] == Decimal('20.00')

    def test_input_not_mutated(self):
        entries = [entry(PAID, '5.00'), entry(BORROWED, '9.00', minutes=1)]
        snapshot = [(e.id, e.kind, e.amount, e.created_at) for e in entries]

        compute_balance(entries)

        assert [(e.id, e.kind, e.amount, e.created_at) for e in entries] == snapshot

    def test_accepts_plain_objects(self):
        row = SimpleNamespace(id='a', kind=PAID, amount='12.5', created_at=T0)

        summary = compute_balance([row])

        assert summary['balance'] == Decimal('-12.5')
        assert summary['last_paid_amount'] == Decimal('12.5')

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError):
            compute_balance([entry('refund', '1.00')])
