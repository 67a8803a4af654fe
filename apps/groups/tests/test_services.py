"""
Service layer unit tests for groups app.
"""

import pytest
from uuid import uuid4

from apps.groups.models import Group
from apps.groups.services import (
    create_group,
    get_groups_for_owner,
    get_group_by_id,
)
from apps.groups.services.exceptions import (
    GroupNotFoundError,
    DuplicateGroupNameError,
)


@pytest.mark.django_db
class TestGroupManagement:
    """Tests for group management service."""

    def test_create_group_success(self, group_owner):
        group = create_group(name='  Neighbours  ', owner=group_owner)

        assert group.name == 'Neighbours'
        assert group.owner == group_owner
        assert Group.objects.filter(owner=group_owner).count() == 1

    def test_create_group_duplicate_name(self, group, group_owner):
        """Names are unique per owner, ignoring case."""
        with pytest.raises(DuplicateGroupNameError):
            create_group(name='regulars', owner=group_owner)

    def test_same_name_for_different_owners(self, group, group_other_user):
        other = create_group(name=group.name, owner=group_other_user)

        assert other.owner == group_other_user

    def test_get_groups_ordered_by_name(self, group_owner):
        create_group(name='Zeta', owner=group_owner)
        create_group(name='Alpha', owner=group_owner)

        names = [g.name for g in get_groups_for_owner(owner=group_owner)]

        assert names == ['Alpha', 'Zeta']

    def test_get_groups_excludes_other_owners(self, group, group_other_user):
        assert list(get_groups_for_owner(owner=group_other_user)) == []

    def test_get_group_by_id_success(self, group, group_owner):
        assert get_group_by_id(group_id=group.id, owner=group_owner) == group

    def test_get_group_by_id_not_found(self, group_owner):
        with pytest.raises(GroupNotFoundError):
            get_group_by_id(group_id=uuid4(), owner=group_owner)

    def test_get_group_by_id_other_owner(self, group, group_other_user):
        with pytest.raises(GroupNotFoundError):
            get_group_by_id(group_id=group.id, owner=group_other_user)
