"""
Domain-specific exceptions for groups app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class GroupsServiceError(Exception):
    """Base exception for all groups service errors."""
    pass


class GroupNotFoundError(GroupsServiceError):
    """Raised when a group does not exist or belongs to another owner."""
    pass


class DuplicateGroupNameError(GroupsServiceError):
    """Raised when the owner already has a group with this name."""
    pass
