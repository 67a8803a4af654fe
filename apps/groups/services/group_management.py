"""
Group management service.

Groups are created and listed per owner. There is no delete operation.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.groups.models import Group

from .exceptions import (
    GroupNotFoundError,
    DuplicateGroupNameError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def create_group(*, name: str, owner: User) -> Group:
    """
    Create a new group for the owner.

    Args:
        name: Group name (surrounding whitespace is stripped)
        owner: User who will own the group

    Returns:
        Created Group instance

    Raises:
        DuplicateGroupNameError: If the owner already has a group with this name
    """
    name = name.strip()

    if Group.objects.filter(owner=owner, name__iexact=name).exists():
        raise DuplicateGroupNameError(f"A group named '{name}' already exists")

    group = Group.objects.create(name=name, owner=owner)
    logger.info("Created group %s for owner %s", group.id, owner.id)

    return group


def get_groups_for_owner(*, owner: User) -> QuerySet[Group]:
    """Return the owner's groups ordered by name."""
    return Group.objects.filter(owner=owner).order_by('name')


def get_group_by_id(*, group_id: UUID, owner: User) -> Group:
    """
    Get one of the owner's groups by ID.

    Raises:
        GroupNotFoundError: If group doesn't exist or belongs to another owner
    """
    try:
        return Group.objects.get(id=group_id, owner=owner)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")
