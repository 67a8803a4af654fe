import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.people.models import Person
from apps.transactions.models import Transaction, TransactionKind


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def owner(db):
    """Create and return the shop owner."""
    return User.objects.create_user(
        email='shop@example.com',
        password='TestPass123!',
        display_name='Shop Owner',
    )


@pytest.fixture
def other_owner(db):
    """Create and return a second, unrelated shop owner."""
    return User.objects.create_user(
        email='othershop@example.com',
        password='TestPass123!',
        display_name='Other Shop',
    )


@pytest.fixture
def authenticated_client(api_client, owner):
    """Return an API client authenticated as the owner."""
    refresh = RefreshToken.for_user(owner)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def other_client(other_owner):
    """Return an API client authenticated as the other owner."""
    client = APIClient()
    refresh = RefreshToken.for_user(other_owner)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def person(owner):
    """Customer without any ledger entries."""
    return Person.objects.create(name='Ravi', owner=owner)


@pytest.fixture
def base_time():
    return timezone.now() - timedelta(days=10)


@pytest.fixture
def make_transaction(person, base_time):
    """Factory for stored ledger entries, offset in days from base_time."""
    def _make(kind, amount, days=0, note='', target=None):
        return Transaction.objects.create(
            person=target or person,
            kind=kind,
            amount=Decimal(amount),
            note=note,
            created_at=base_time + timedelta(days=days),
        )
    return _make


@pytest.fixture
def person_with_ledger(person, make_transaction):
    """Ravi: paid 100 (day 1), paid 50 (day 2), borrowed 30 (day 3)."""
    make_transaction(TransactionKind.PAID, '100.00', days=1)
    make_transaction(TransactionKind.PAID, '50.00', days=2)
    make_transaction(TransactionKind.BORROWED, '30.00', days=3)
    person.refresh_last_payment()
    return person
