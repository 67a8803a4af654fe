from rest_framework import permissions


class IsGroupOwner(permissions.BasePermission):
    """
    Permission: User must be the group owner.
    """

    message = 'You do not have access to this group.'

    def has_object_permission(self, request, view, obj):
        # obj is a Group instance
        return obj.is_owned_by(request.user)
