from rest_framework import mixins, viewsets, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination

from .serializers import (
    GroupSerializer,
    GroupCreateSerializer,
)
from .permissions import IsGroupOwner
from config.routing import UUID_PATTERN

from apps.groups.services import (
    create_group,
    get_groups_for_owner,
    DuplicateGroupNameError,
)


class GroupPagination(PageNumberPagination):
    """Custom pagination for groups."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class GroupViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for customer groups.

    list: Get the owner's groups ordered by name
    create: Create a new group
    retrieve: Get a specific group
    """

    serializer_class = GroupSerializer
    permission_classes = [IsAuthenticated, IsGroupOwner]
    pagination_class = GroupPagination
    lookup_value_regex = UUID_PATTERN

    def get_queryset(self):
        """Return only groups owned by the user."""
        return get_groups_for_owner(owner=self.request.user)

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'create':
            return GroupCreateSerializer
        return GroupSerializer

    def create(self, request, *args, **kwargs):
        """Create a new group."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            group = create_group(
                name=serializer.validated_data['name'],
                owner=request.user,
            )
        except DuplicateGroupNameError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = GroupSerializer(group, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)
