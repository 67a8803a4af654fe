import base64
import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group
from apps.people.models import Person, Contact, Document
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
def group(owner):
    return Group.objects.create(name='Regulars', owner=owner)


@pytest.fixture
def other_group(other_owner):
    return Group.objects.create(name='Elsewhere', owner=other_owner)


@pytest.fixture
def person(owner, group):
    """Customer with one contact number, tagged with the group."""
    person = Person.objects.create(name='Ravi Kumar', owner=owner, group=group, address='12 Market Road')
    Contact.objects.create(person=person, number='+91 98450 12345', tag='mobile')
    return person


def _record(person, kind, amount, when):
    return Transaction.objects.create(person=person, kind=kind, amount=Decimal(amount), created_at=when)


@pytest.fixture
def shop_ledger(owner, group, person):
    """
    Four customers:

    - Ravi (group): borrowed 100, paid 40 two days ago -> owes 60
    - Meena: borrowed 80, never paid -> owes 80
    - Arjun (group): paid 50 ten days ago, borrowed 20 -> owes -30
    - Zoya: borrowed 25, paid 5 five days ago -> owes 20
    """
    now = timezone.now()

    _record(person, TransactionKind.BORROWED, '100.00', now - timedelta(days=20))
    _record(person, TransactionKind.PAID, '40.00', now - timedelta(days=2))

    meena = Person.objects.create(name='meena', owner=owner)
    Contact.objects.create(person=meena, number='0207 946 0001', tag='home')
    _record(meena, TransactionKind.BORROWED, '80.00', now - timedelta(days=15))

    arjun = Person.objects.create(name='Arjun', owner=owner, group=group)
    _record(arjun, TransactionKind.PAID, '50.00', now - timedelta(days=10))
    _record(arjun, TransactionKind.BORROWED, '20.00', now - timedelta(days=9))

    zoya = Person.objects.create(name='Zoya', owner=owner)
    _record(zoya, TransactionKind.BORROWED, '25.00', now - timedelta(days=30))
    _record(zoya, TransactionKind.PAID, '5.00', now - timedelta(days=5))

    for customer in (person, meena, arjun, zoya):
        customer.refresh_last_payment()

    return {'ravi': person, 'meena': meena, 'arjun': arjun, 'zoya': zoya}


@pytest.fixture
def pdf_bytes():
    return b'%PDF-1.4 fake document body'


@pytest.fixture
def pdf_data_url(pdf_bytes):
    return 'data:application/pdf;base64,' + base64.b64encode(pdf_bytes).decode()


@pytest.fixture
def document(person, pdf_bytes, pdf_data_url):
    return Document.objects.create(
        person=person,
        name='Aadhaar card',
        file_type='PDF',
        extension='pdf',
        file_size=len(pdf_bytes),
        file_data=pdf_data_url,
    )
