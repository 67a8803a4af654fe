from rest_framework import permissions


class IsPersonOwner(permissions.BasePermission):
    """
    Permission: User must own the person.
    """

    message = 'You do not have access to this person.'

    def has_object_permission(self, request, view, obj):
        # obj is a Person instance
        return obj.is_owned_by(request.user)


class IsOwnerOfPerson(permissions.BasePermission):
    """
    Permission: User must own the person a contact or document belongs to.
    """

    message = 'You do not have access to this record.'

    def has_object_permission(self, request, view, obj):
        # obj is a Contact or Document instance
        return obj.person.is_owned_by(request.user)
