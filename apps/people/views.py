from django.http import HttpResponse
from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    PersonSerializer,
    PersonDetailSerializer,
    PersonCreateSerializer,
    PersonUpdateSerializer,
    PersonFilterSerializer,
    PeopleSummarySerializer,
    ContactSerializer,
    ContactInputSerializer,
    ContactUpdateSerializer,
    DocumentSerializer,
    DocumentDetailSerializer,
    DocumentUploadSerializer,
)
from .patches import PersonPatch, build_patch
from .permissions import IsPersonOwner, IsOwnerOfPerson
from config.routing import UUID_PATTERN

from apps.groups.services import GroupNotFoundError
from apps.people.models import Contact, Document
from apps.people.services import (
    get_people_for_owner,
    get_people_with_balances,
    get_person_detail,
    people_summary,
    create_person,
    update_person,
    get_contacts_for_person,
    add_contact,
    update_contact,
    delete_contact,
    get_documents_for_person,
    create_document,
    delete_document,
    prepare_download,
    PersonNotFoundError,
    InvalidPersonDataError,
    ContactNotFoundError,
    DocumentNotFoundError,
    InvalidDocumentError,
)
from apps.transactions.serializers import TransactionSerializer
from apps.transactions.services import get_transactions_for_owner


class PersonPagination(PageNumberPagination):
    """Custom pagination for people."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class PersonViewSet(
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for customers.

    list: Get the owner's customers filtered and sorted (?group, ?search, ?sort)
    create: Create a customer with optional contacts
    retrieve: Customer profile with ledger, totals and documents
    partial_update: Edit a customer
    """

    serializer_class = PersonSerializer
    permission_classes = [IsAuthenticated, IsPersonOwner]
    pagination_class = PersonPagination
    http_method_names = ['get', 'post', 'patch', 'head', 'options']
    lookup_value_regex = UUID_PATTERN

    def get_queryset(self):
        """Return only people owned by the user."""
        return get_people_for_owner(owner=self.request.user)

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'retrieve':
            return PersonDetailSerializer
        return PersonSerializer

    def _error(self, exc):
        if isinstance(exc, (PersonNotFoundError, ContactNotFoundError, DocumentNotFoundError)):
            return Response({'error': str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    @extend_schema(
        parameters=[
            OpenApiParameter(name='group', type=str, description='Group id or "all"'),
            OpenApiParameter(name='search', type=str, description='Name or phone number fragment'),
            OpenApiParameter(
                name='sort',
                type=str,
                description='name, balance-high, balance-low or last-paid'
            ),
        ]
    )
    def list(self, request, *args, **kwargs):
        """List customers with derived balances."""
        filter_serializer = PersonFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        filters = filter_serializer.validated_data

        people = get_people_with_balances(
            owner=request.user,
            group_filter=filters['group'],
            search_text=filters['search'],
            sort_key=filters['sort'],
        )

        page = self.paginate_queryset(people)
        if page is not None:
            serializer = PersonSerializer(page, many=True, context={'request': request})
            return self.get_paginated_response(serializer.data)

        serializer = PersonSerializer(people, many=True, context={'request': request})
        return Response(serializer.data)

    def retrieve(self, request, *args, **kwargs):
        """Customer profile."""
        try:
            person = get_person_detail(person_id=kwargs['pk'], owner=request.user)
        except PersonNotFoundError as e:
            return self._error(e)

        self.check_object_permissions(request, person)

        serializer = PersonDetailSerializer(person, context={'request': request})
        return Response(serializer.data)

    @extend_schema(request=PersonCreateSerializer, responses=PersonSerializer)
    def create(self, request, *args, **kwargs):
        """Create a customer."""
        serializer = PersonCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            person = create_person(
                owner=request.user,
                name=data['name'],
                dob=data.get('dob'),
                address=data.get('address'),
                photo=data.get('photo'),
                group_id=data.get('group'),
                contacts=data.get('contacts', []),
            )
        except GroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except InvalidPersonDataError as e:
            return self._error(e)

        output_serializer = PersonSerializer(person, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(request=PersonUpdateSerializer, responses=PersonDetailSerializer)
    def partial_update(self, request, *args, **kwargs):
        """Edit a customer. Only the fields sent are changed."""
        serializer = PersonUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        if 'group' in data:
            data['group_id'] = data.pop('group')

        try:
            person = update_person(
                owner=request.user,
                person_id=kwargs['pk'],
                patch=build_patch(PersonPatch, data),
            )
        except GroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except (PersonNotFoundError, InvalidPersonDataError) as e:
            return self._error(e)

        output_serializer = PersonDetailSerializer(person, context={'request': request})
        return Response(output_serializer.data)

    @extend_schema(responses=PeopleSummarySerializer)
    @action(detail=False, methods=['get'])
    def summary(self, request):
        """
        Totals across the owner's customers.

        GET /api/people/summary/
        """
        totals = people_summary(owner=request.user)
        return Response(PeopleSummarySerializer(totals).data)

    @extend_schema(request=ContactInputSerializer, responses=ContactSerializer(many=True))
    @action(detail=True, methods=['get', 'post'])
    def contacts(self, request, pk=None):
        """
        List or add contact numbers.

        GET  /api/people/{id}/contacts/
        POST /api/people/{id}/contacts/
        """
        try:
            if request.method == 'GET':
                contacts = get_contacts_for_person(person_id=pk, owner=request.user)
                return Response(ContactSerializer(contacts, many=True).data)

            serializer = ContactInputSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            contact = add_contact(
                owner=request.user,
                person_id=pk,
                number=serializer.validated_data['number'],
                tag=serializer.validated_data.get('tag'),
            )
        except (PersonNotFoundError, InvalidPersonDataError) as e:
            return self._error(e)

        return Response(ContactSerializer(contact).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses=TransactionSerializer(many=True))
    @action(detail=True, methods=['get'])
    def transactions(self, request, pk=None):
        """
        Customer ledger, newest first.

        GET /api/people/{id}/transactions/
        """
        person = self.get_object()
        entries = get_transactions_for_owner(owner=request.user, person_id=person.id)
        return Response(TransactionSerializer(entries, many=True).data)

    @extend_schema(request=DocumentUploadSerializer, responses=DocumentSerializer(many=True))
    @action(detail=True, methods=['get', 'post'])
    def documents(self, request, pk=None):
        """
        List document metadata or upload a document.

        GET  /api/people/{id}/documents/
        POST /api/people/{id}/documents/
        """
        try:
            if request.method == 'GET':
                documents = get_documents_for_person(person_id=pk, owner=request.user)
                return Response(DocumentSerializer(documents, many=True).data)

            serializer = DocumentUploadSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            document = create_document(
                owner=request.user,
                person_id=pk,
                name=serializer.validated_data['name'],
                file_name=serializer.validated_data['file_name'],
                file_data=serializer.validated_data['file_data'],
            )
        except (PersonNotFoundError, InvalidDocumentError) as e:
            return self._error(e)

        return Response(DocumentSerializer(document).data, status=status.HTTP_201_CREATED)


class ContactViewSet(viewsets.GenericViewSet):
    """
    ViewSet for editing contact numbers.

    partial_update: Change number and/or tag
    destroy: Delete a contact
    """

    serializer_class = ContactSerializer
    permission_classes = [IsAuthenticated, IsOwnerOfPerson]
    http_method_names = ['patch', 'delete', 'options']
    lookup_value_regex = UUID_PATTERN

    def get_queryset(self):
        return Contact.objects.filter(person__owner=self.request.user)

    @extend_schema(request=ContactUpdateSerializer, responses=ContactSerializer)
    def partial_update(self, request, *args, **kwargs):
        serializer = ContactUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            contact = update_contact(
                owner=request.user,
                contact_id=kwargs['pk'],
                number=serializer.validated_data.get('number'),
                tag=serializer.validated_data.get('tag'),
            )
        except ContactNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidPersonDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ContactSerializer(contact).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_contact(owner=request.user, contact_id=kwargs['pk'])
        except ContactNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)


class DocumentViewSet(
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for stored documents.

    retrieve: Document with its payload
    destroy: Delete a document
    download: Decoded file as an attachment
    """

    serializer_class = DocumentDetailSerializer
    permission_classes = [IsAuthenticated, IsOwnerOfPerson]
    http_method_names = ['get', 'delete', 'head', 'options']
    lookup_value_regex = UUID_PATTERN

    def get_queryset(self):
        return Document.objects.filter(person__owner=self.request.user).select_related('person')

    def destroy(self, request, *args, **kwargs):
        try:
            delete_document(owner=request.user, document_id=kwargs['pk'])
        except DocumentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={(200, 'application/octet-stream'): OpenApiTypes.BINARY})
    @action(detail=True, methods=['get'])
    def download(self, request, pk=None):
        """
        Download the decoded file.

        GET /api/people/documents/{id}/download/
        """
        try:
            content, mime_type, file_name = prepare_download(owner=request.user, document_id=pk)
        except DocumentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidDocumentError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        response = HttpResponse(content, content_type=mime_type)
        response['Content-Disposition'] = f'attachment; filename="{file_name}"'
        response['Content-Length'] = len(content)
        return response
