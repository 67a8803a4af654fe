from decimal import Decimal
from rest_framework import serializers

from .models import Transaction, TransactionKind


class TransactionSerializer(serializers.ModelSerializer):
    """Ledger entry as returned by the API."""

    person_name = serializers.CharField(source='person.name', read_only=True)

    class Meta:
        model = Transaction
        fields = [
            'id',
            'person',
            'person_name',
            'kind',
            'amount',
            'note',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class TransactionCreateSerializer(serializers.Serializer):
    """Input for recording a ledger entry."""

    person = serializers.UUIDField()
    kind = serializers.ChoiceField(choices=TransactionKind.choices)
    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.01')
    )
    note = serializers.CharField(required=False, allow_blank=True, default='')
    created_at = serializers.DateTimeField(required=False)


class TransactionUpdateSerializer(serializers.Serializer):
    """Input for editing a ledger entry. Every field is optional."""

    kind = serializers.ChoiceField(choices=TransactionKind.choices, required=False)
    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.01'),
        required=False
    )
    note = serializers.CharField(required=False, allow_blank=True)
    created_at = serializers.DateTimeField(required=False)


class TransactionFilterSerializer(serializers.Serializer):
    """Query parameters for the transaction list."""

    person = serializers.UUIDField(required=False)
