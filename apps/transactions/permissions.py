from rest_framework import permissions


class IsTransactionOwner(permissions.BasePermission):
    """
    Permission: User must own the person the entry belongs to.
    """

    message = 'You do not have access to this transaction.'

    def has_object_permission(self, request, view, obj):
        # obj is a Transaction instance
        return obj.person.is_owned_by(request.user)
