from rest_framework import serializers

from .models import Person, Contact, Document
from .selection import ALL_GROUPS, SORT_KEYS, SORT_NAME
from apps.transactions.serializers import TransactionSerializer


class ContactSerializer(serializers.ModelSerializer):
    """Phone number of a person."""

    class Meta:
        model = Contact
        fields = ['id', 'person', 'number', 'tag', 'created_at']
        read_only_fields = ['id', 'person', 'created_at']


class ContactInputSerializer(serializers.Serializer):
    number = serializers.CharField(max_length=32)
    tag = serializers.CharField(max_length=30, required=False, allow_blank=True)

    def validate_number(self, value):
        if not value.strip():
            raise serializers.ValidationError('Number cannot be blank')
        return value.strip()


class ContactUpdateSerializer(ContactInputSerializer):
    number = serializers.CharField(max_length=32, required=False)


class DocumentSerializer(serializers.ModelSerializer):
    """Document metadata without the payload."""

    class Meta:
        model = Document
        fields = [
            'id',
            'person',
            'name',
            'file_type',
            'extension',
            'file_size',
            'created_at',
        ]
        read_only_fields = fields


class DocumentDetailSerializer(DocumentSerializer):
    """Document with its inline payload."""

    class Meta(DocumentSerializer.Meta):
        fields = DocumentSerializer.Meta.fields + ['file_data']
        read_only_fields = fields


class DocumentUploadSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    file_name = serializers.CharField(max_length=255)
    file_data = serializers.CharField(trim_whitespace=False)

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError('Document name cannot be blank')
        return value


class PersonSerializer(serializers.ModelSerializer):
    """Person row with derived balance and contacts."""

    group_name = serializers.CharField(source='group.name', read_only=True, default=None)
    contacts = ContactSerializer(many=True, read_only=True)
    balance = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = Person
        fields = [
            'id',
            'name',
            'dob',
            'address',
            'photo',
            'group',
            'group_name',
            'contacts',
            'balance',
            'last_paid_date',
            'last_paid_amount',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PersonDetailSerializer(PersonSerializer):
    """Customer profile: ledger, totals and document metadata."""

    transactions = serializers.SerializerMethodField()
    documents = DocumentSerializer(many=True, read_only=True)
    total_borrowed = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    total_paid = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta(PersonSerializer.Meta):
        fields = PersonSerializer.Meta.fields + [
            'transactions',
            'documents',
            'total_borrowed',
            'total_paid',
        ]
        read_only_fields = fields

    def get_transactions(self, obj):
        """Ledger entries, newest first."""
        entries = sorted(
            obj.transactions.all(),
            key=lambda entry: (entry.created_at, str(entry.id)),
            reverse=True
        )
        return TransactionSerializer(entries, many=True).data


class PersonCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    dob = serializers.DateField(required=False, allow_null=True)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    photo = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)
    group = serializers.UUIDField(required=False, allow_null=True)
    contacts = ContactInputSerializer(many=True, required=False)

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError('Name cannot be blank')
        return value


class PersonUpdateSerializer(serializers.Serializer):
    """Partial edit of a person. Omitted fields are left unchanged."""

    name = serializers.CharField(max_length=200, required=False)
    dob = serializers.DateField(required=False, allow_null=True)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    photo = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)
    group = serializers.UUIDField(required=False, allow_null=True)


class PersonFilterSerializer(serializers.Serializer):
    """Query parameters for the people list."""

    group = serializers.CharField(required=False, allow_blank=True, default=ALL_GROUPS)
    search = serializers.CharField(required=False, allow_blank=True, default='')
    sort = serializers.ChoiceField(choices=SORT_KEYS, required=False, default=SORT_NAME)


class PeopleSummarySerializer(serializers.Serializer):
    total_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_owed = serializers.DecimalField(max_digits=14, decimal_places=2)
    people_count = serializers.IntegerField()
