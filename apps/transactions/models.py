from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid

from apps.transactions import ledger


class TransactionKind(models.TextChoices):
    BORROWED = ledger.BORROWED, 'Borrowed'
    PAID = ledger.PAID, 'Paid'


class Transaction(models.Model):
    """Ledger entry for a customer. Direction is carried by kind, never by sign."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    person = models.ForeignKey(
        'people.Person',
        on_delete=models.CASCADE,
        related_name='transactions'
    )

    kind = models.CharField(max_length=10, choices=TransactionKind.choices)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    note = models.TextField(blank=True)

    # Timestamps
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'transactions'
        indexes = [
            models.Index(fields=['person', 'created_at'], name='transactions_person_idx'),
            models.Index(fields=['person', 'kind'], name='transactions_kind_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        sign = '+' if self.kind == TransactionKind.BORROWED else '-'
        return f"{self.person.name}: {sign}{self.amount} ({self.get_kind_display()})"
