import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group
from apps.people.models import Person


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def group_owner(db):
    """Create and return a test user (group owner)."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Group Owner',
    )


@pytest.fixture
def group_other_user(db):
    """Create and return a user who owns nothing."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other User',
    )


@pytest.fixture
def owner_client(group_owner):
    """Return an API client authenticated as the group owner."""
    client = APIClient()
    refresh = RefreshToken.for_user(group_owner)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def other_client(group_other_user):
    """Return an API client authenticated as another user."""
    client = APIClient()
    refresh = RefreshToken.for_user(group_other_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def group(group_owner):
    """Create a group owned by group_owner."""
    return Group.objects.create(name='Regulars', owner=group_owner)


@pytest.fixture
def group_with_people(group, group_owner):
    """Group with two people tagged."""
    Person.objects.create(name='Asha', owner=group_owner, group=group)
    Person.objects.create(name='Bilal', owner=group_owner, group=group)
    return group
