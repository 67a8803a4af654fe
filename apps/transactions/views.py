from rest_framework import mixins, viewsets, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    TransactionSerializer,
    TransactionCreateSerializer,
    TransactionUpdateSerializer,
    TransactionFilterSerializer,
)
from .permissions import IsTransactionOwner
from config.routing import UUID_PATTERN
from .patches import TransactionPatch

from apps.people.patches import build_patch
from apps.people.services import PersonNotFoundError
from apps.transactions.services import (
    get_transactions_for_owner,
    create_transaction,
    update_transaction,
    delete_transaction,
    InvalidTransactionError,
    TransactionNotFoundError,
)


class TransactionPagination(PageNumberPagination):
    """Custom pagination for ledger entries."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 500


class TransactionViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for ledger entries.

    list: Get the owner's entries, newest first (filter with ?person=<id>)
    create: Record a borrowed or paid entry
    retrieve: Get a specific entry
    partial_update: Edit an entry
    destroy: Delete an entry
    """

    serializer_class = TransactionSerializer
    permission_classes = [IsAuthenticated, IsTransactionOwner]
    pagination_class = TransactionPagination
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']
    lookup_value_regex = UUID_PATTERN

    def get_queryset(self):
        """Return only entries of people owned by the user."""
        person_id = None
        if self.action == 'list':
            filter_serializer = TransactionFilterSerializer(data=self.request.query_params)
            filter_serializer.is_valid(raise_exception=True)
            person_id = filter_serializer.validated_data.get('person')

        return get_transactions_for_owner(owner=self.request.user, person_id=person_id)

    @extend_schema(
        parameters=[
            OpenApiParameter(name='person', type=str, description='Filter by person id'),
        ]
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=TransactionCreateSerializer, responses=TransactionSerializer)
    def create(self, request, *args, **kwargs):
        """Record a ledger entry and refresh the person's last payment."""
        serializer = TransactionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            entry = create_transaction(
                owner=request.user,
                person_id=data['person'],
                kind=data['kind'],
                amount=data['amount'],
                note=data.get('note', ''),
                created_at=data.get('created_at'),
            )
        except PersonNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidTransactionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = TransactionSerializer(entry, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(request=TransactionUpdateSerializer, responses=TransactionSerializer)
    def partial_update(self, request, *args, **kwargs):
        """Edit a ledger entry."""
        serializer = TransactionUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            entry = update_transaction(
                owner=request.user,
                transaction_id=kwargs['pk'],
                patch=build_patch(TransactionPatch, serializer.validated_data),
            )
        except TransactionNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidTransactionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = TransactionSerializer(entry, context={'request': request})
        return Response(output_serializer.data)

    def destroy(self, request, *args, **kwargs):
        """Delete a ledger entry and refresh the person's last payment."""
        try:
            delete_transaction(owner=request.user, transaction_id=kwargs['pk'])
        except TransactionNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)
