"""
Person management service.

People are created and edited but never deleted. Balances are derived
from the ledger on read and attached to the instances as attributes.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.groups.services import get_group_by_id
from apps.people.models import Person, Contact
from apps.people.patches import PersonPatch, optional_text
from apps.people.selection import select_and_order
from apps.transactions.ledger import compute_balance

from .exceptions import (
    PersonNotFoundError,
    InvalidPersonDataError,
)

logger = logging.getLogger(__name__)


def get_people_for_owner(*, owner: User) -> QuerySet[Person]:
    """Return the owner's people with contacts and ledger prefetched."""
    return (
        Person.objects.filter(owner=owner)
        .select_related('group')
        .prefetch_related('contacts', 'transactions')
        .order_by('name')
    )


def get_person_by_id(*, person_id: UUID, owner: User, for_update: bool = False) -> Person:
    """
    Get one of the owner's people by ID.

    Raises:
        PersonNotFoundError: If person doesn't exist or belongs to another owner
    """
    queryset = Person.objects.all()
    if for_update:
        queryset = queryset.select_for_update()

    try:
        return queryset.get(id=person_id, owner=owner)
    except Person.DoesNotExist:
        raise PersonNotFoundError(f"Person with ID {person_id} not found")


def attach_ledger(person: Person) -> Person:
    """Set balance, total_borrowed and total_paid on the person."""
    summary = compute_balance(person.transactions.all())

    person.balance = summary['balance']
    person.total_borrowed = summary['total_borrowed']
    person.total_paid = summary['total_paid']

    return person


def get_people_with_balances(
    *,
    owner: User,
    group_filter: str = 'all',
    search_text: str = '',
    sort_key: str = 'name'
) -> list[Person]:
    """
    Get the owner's customer list as displayed.

    Args:
        owner: Authenticated user
        group_filter: Group id, or "all"
        search_text: Name or phone number fragment
        sort_key: name, balance-high, balance-low or last-paid

    Returns:
        List of Person instances with ledger values attached

    Raises:
        ValueError: If sort_key is not recognised
    """
    people = [attach_ledger(person) for person in get_people_for_owner(owner=owner)]
    return select_and_order(
        people,
        group_filter=group_filter,
        search_text=search_text,
        sort_key=sort_key,
    )


def get_person_detail(*, person_id: UUID, owner: User) -> Person:
    """Get a person with contacts, transactions and documents prefetched."""
    try:
        person = (
            Person.objects.select_related('group')
            .prefetch_related('contacts', 'transactions', 'documents')
            .get(id=person_id, owner=owner)
        )
    except Person.DoesNotExist:
        raise PersonNotFoundError(f"Person with ID {person_id} not found")

    return attach_ledger(person)


def people_summary(*, owner: User) -> dict:
    """
    Totals across the owner's customers.

    Returns:
        dict with total_balance, total_owed (sum of positive balances)
        and people_count
    """
    total_balance = Decimal('0')
    total_owed = Decimal('0')
    people_count = 0

    for person in get_people_for_owner(owner=owner):
        balance = attach_ledger(person).balance
        total_balance += balance
        if balance > 0:
            total_owed += balance
        people_count += 1

    return {
        'total_balance': total_balance,
        'total_owed': total_owed,
        'people_count': people_count,
    }


@transaction.atomic
def create_person(
    *,
    owner: User,
    name: str,
    dob=None,
    address: Optional[str] = '',
    photo: Optional[str] = '',
    group_id: Optional[UUID] = None,
    contacts: Iterable[dict] = ()
) -> Person:
    """
    Create a person, optionally with contact numbers.

    Args:
        owner: User who will own the person
        name: Display name (surrounding whitespace is stripped)
        dob: Date of birth
        address: Postal address
        photo: Inline image data URL
        group_id: One of the owner's groups
        contacts: Dicts with ``number`` and optional ``tag``

    Returns:
        Created Person instance with ledger values attached

    Raises:
        InvalidPersonDataError: If the name is blank
        GroupNotFoundError: If the group belongs to another owner
    """
    name = name.strip()
    if not name:
        raise InvalidPersonDataError("Name cannot be blank")

    group = get_group_by_id(group_id=group_id, owner=owner) if group_id else None

    person = Person.objects.create(
        owner=owner,
        name=name,
        dob=dob,
        address=optional_text(address),
        photo=optional_text(photo),
        group=group,
    )

    Contact.objects.bulk_create([
        Contact(person=person, number=contact['number'], tag=contact.get('tag') or 'mobile')
        for contact in contacts
    ])

    logger.info("Created person %s for owner %s", person.id, owner.id)

    return attach_ledger(person)


@transaction.atomic
def update_person(*, owner: User, person_id: UUID, patch: PersonPatch) -> Person:
    """
    Apply a patch to one of the owner's people.

    Only fields that differ from the stored record are written.

    Raises:
        PersonNotFoundError: If person doesn't exist or belongs to another owner
        InvalidPersonDataError: If the new name is blank
        GroupNotFoundError: If the new group belongs to another owner
    """
    if patch.is_empty():
        return get_person_detail(person_id=person_id, owner=owner)

    person = get_person_by_id(person_id=person_id, owner=owner, for_update=True)
    changes = patch.changes(person)

    if 'name' in changes:
        changes['name'] = (changes['name'] or '').strip()
        if not changes['name']:
            raise InvalidPersonDataError("Name cannot be blank")

    for field in ('address', 'photo'):
        if field in changes:
            changes[field] = optional_text(changes[field])

    if changes.get('group_id'):
        get_group_by_id(group_id=changes['group_id'], owner=owner)

    if changes:
        for field, value in changes.items():
            setattr(person, field, value)
        update_fields = [
            'group' if field == 'group_id' else field for field in changes
        ]
        person.save(update_fields=update_fields + ['updated_at'])
        logger.info("Updated person %s fields %s", person.id, sorted(changes))

    return get_person_detail(person_id=person.id, owner=owner)
