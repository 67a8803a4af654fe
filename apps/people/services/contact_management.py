"""Contact management service."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.people.models import Contact

from .exceptions import ContactNotFoundError, InvalidPersonDataError
from .person_management import get_person_by_id

logger = logging.getLogger(__name__)


def _clean_number(number: str) -> str:
    number = (number or '').strip()
    if not number:
        raise InvalidPersonDataError("Contact number cannot be blank")
    return number


def get_contacts_for_person(*, person_id: UUID, owner: User) -> QuerySet[Contact]:
    person = get_person_by_id(person_id=person_id, owner=owner)
    return person.contacts.all()


def get_contact_by_id(*, contact_id: UUID, owner: User) -> Contact:
    """
    Get a contact belonging to one of the owner's people.

    Raises:
        ContactNotFoundError: If contact doesn't exist or belongs to another owner
    """
    try:
        return Contact.objects.select_related('person').get(id=contact_id, person__owner=owner)
    except Contact.DoesNotExist:
        raise ContactNotFoundError(f"Contact with ID {contact_id} not found")


@transaction.atomic
def add_contact(*, owner: User, person_id: UUID, number: str, tag: Optional[str] = None) -> Contact:
    person = get_person_by_id(person_id=person_id, owner=owner)
    contact = Contact.objects.create(
        person=person,
        number=_clean_number(number),
        tag=tag or 'mobile',
    )
    logger.info("Added contact %s to person %s", contact.id, person.id)
    return contact


@transaction.atomic
def update_contact(
    *,
    owner: User,
    contact_id: UUID,
    number: Optional[str] = None,
    tag: Optional[str] = None
) -> Contact:
    """Change a contact's number and/or tag. None leaves a field unchanged."""
    contact = get_contact_by_id(contact_id=contact_id, owner=owner)

    update_fields = []
    if number is not None:
        contact.number = _clean_number(number)
        update_fields.append('number')
    if tag is not None:
        contact.tag = tag or 'mobile'
        update_fields.append('tag')

    if update_fields:
        contact.save(update_fields=update_fields)

    return contact


@transaction.atomic
def delete_contact(*, owner: User, contact_id: UUID) -> None:
    contact = get_contact_by_id(contact_id=contact_id, owner=owner)
    logger.info("Deleting contact %s from person %s", contact.id, contact.person_id)
    contact.delete()
