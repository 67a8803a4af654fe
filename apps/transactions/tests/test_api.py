import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status

from apps.people.models import Person
from apps.transactions.models import Transaction, TransactionKind


# =============================================================================
# Transaction ViewSet Tests
# =============================================================================

@pytest.mark.django_db
class TestTransactionList:
    """Tests for GET /api/transactions/"""

    def test_requires_auth(self, api_client):
        url = reverse('transactions:transaction-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_newest_first(self, authenticated_client, person_with_ledger):
        url = reverse('transactions:transaction-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 3
        kinds = [row['kind'] for row in response.data['results']]
        assert kinds == ['borrowed', 'paid', 'paid']
        assert response.data['results'][0]['person_name'] == 'Ravi'

    def test_filter_by_person(self, authenticated_client, person_with_ledger, owner, make_transaction):
        other = Person.objects.create(name='Sunita', owner=owner)
        make_transaction(TransactionKind.BORROWED, '8.00', target=other)

        url = reverse('transactions:transaction-list')
        response = authenticated_client.get(url, {'person': str(other.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['person'] == other.id

    def test_invalid_person_filter(self, authenticated_client):
        url = reverse('transactions:transaction-list')
        response = authenticated_client.get(url, {'person': 'not-a-uuid'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_other_owner_sees_nothing(self, other_client, person_with_ledger):
        url = reverse('transactions:transaction-list')
        response = other_client.get(url)

        assert response.data['count'] == 0


@pytest.mark.django_db
class TestTransactionCreate:
    """Tests for POST /api/transactions/"""

    def test_record_payment(self, authenticated_client, person):
        url = reverse('transactions:transaction-list')
        response = authenticated_client.post(url, {
            'person': str(person.id),
            'kind': 'paid',
            'amount': '45.50',
            'note': 'cash',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['kind'] == 'paid'
        assert Decimal(response.data['amount']) == Decimal('45.50')

        person.refresh_from_db()
        assert person.last_paid_amount == Decimal('45.50')

    def test_zero_amount(self, authenticated_client, person):
        url = reverse('transactions:transaction-list')
        response = authenticated_client.post(url, {
            'person': str(person.id),
            'kind': 'borrowed',
            'amount': '0',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'amount' in response.data
        assert not Transaction.objects.exists()

    def test_invalid_kind(self, authenticated_client, person):
        url = reverse('transactions:transaction-list')
        response = authenticated_client.post(url, {
            'person': str(person.id),
            'kind': 'gift',
            'amount': '5',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'kind' in response.data

    def test_other_owner_person(self, other_client, person):
        url = reverse('transactions:transaction-list')
        response = other_client.post(url, {
            'person': str(person.id),
            'kind': 'paid',
            'amount': '5',
        })

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert not Transaction.objects.exists()


@pytest.mark.django_db
class TestTransactionDetail:
    """Tests for GET/PATCH/DELETE /api/transactions/{id}/"""

    def test_retrieve(self, authenticated_client, person_with_ledger):
        entry = person_with_ledger.transactions.first()
        url = reverse('transactions:transaction-detail', args=[entry.id])
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(entry.id)

    def test_retrieve_other_owner(self, other_client, person_with_ledger):
        entry = person_with_ledger.transactions.first()
        url = reverse('transactions:transaction-detail', args=[entry.id])
        response = other_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_patch_amount(self, authenticated_client, person_with_ledger):
        latest_payment = person_with_ledger.transactions.get(amount=Decimal('50.00'))
        url = reverse('transactions:transaction-detail', args=[latest_payment.id])
        response = authenticated_client.patch(url, {'amount': '55.00'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['amount']) == Decimal('55.00')

        person_with_ledger.refresh_from_db()
        assert person_with_ledger.last_paid_amount == Decimal('55.00')

    def test_patch_negative_amount(self, authenticated_client, person_with_ledger):
        entry = person_with_ledger.transactions.first()
        url = reverse('transactions:transaction-detail', args=[entry.id])
        response = authenticated_client.patch(url, {'amount': '-1'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_patch_other_owner(self, other_client, person_with_ledger):
        entry = person_with_ledger.transactions.first()
        url = reverse('transactions:transaction-detail', args=[entry.id])
        response = other_client.patch(url, {'note': 'x'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_put_not_allowed(self, authenticated_client, person_with_ledger):
        entry = person_with_ledger.transactions.first()
        url = reverse('transactions:transaction-detail', args=[entry.id])
        response = authenticated_client.put(url, {'amount': '1'}, format='json')

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED

    def test_delete_refreshes_cache(self, authenticated_client, person, make_transaction):
        payment = make_transaction(TransactionKind.PAID, '20.00', days=1)
        person.refresh_last_payment()

        url = reverse('transactions:transaction-detail', args=[payment.id])
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        person.refresh_from_db()
        assert person.last_paid_amount is None
        assert person.last_paid_date is None

    def test_malformed_id(self, authenticated_client):
        response = authenticated_client.get('/api/transactions/not-a-uuid/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
