"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    GroupsServiceError,
    GroupNotFoundError,
    DuplicateGroupNameError,
)

from .group_management import (
    create_group,
    get_groups_for_owner,
    get_group_by_id,
)


__all__ = [
    # Exceptions
    'GroupsServiceError',
    'GroupNotFoundError',
    'DuplicateGroupNameError',

    # Group Management
    'create_group',
    'get_groups_for_owner',
    'get_group_by_id',
]
