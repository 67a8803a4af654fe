from django.db import models
import uuid

from apps.transactions.ledger import compute_balance


class Person(models.Model):
    """Customer who borrows from the shop."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    dob = models.DateField(null=True, blank=True)
    address = models.TextField(blank=True)

    # Inline image payload (data URL)
    photo = models.TextField(blank=True)

    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='people'
    )
    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='people'
    )

    # Cache of the latest paid transaction, kept by refresh_last_payment()
    last_paid_date = models.DateTimeField(null=True, blank=True)
    last_paid_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'people'
        indexes = [
            models.Index(fields=['owner', 'name'], name='people_owner_name_idx'),
            models.Index(fields=['owner', 'group'], name='people_owner_group_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name

    def is_owned_by(self, user):
        return self.owner_id == user.pk

    def contact_numbers(self):
        return [contact.number for contact in self.contacts.all()]

    def refresh_last_payment(self):
        """Recalculate the cached last payment from the stored transactions."""
        summary = compute_balance(self.transactions.all())

        self.last_paid_date = summary['last_paid_date']
        self.last_paid_amount = summary['last_paid_amount']
        self.save(update_fields=['last_paid_date', 'last_paid_amount', 'updated_at'])

        return summary


class Contact(models.Model):
    """Phone number for a person."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    person = models.ForeignKey(
        Person,
        on_delete=models.CASCADE,
        related_name='contacts'
    )
    number = models.CharField(max_length=32)
    tag = models.CharField(max_length=30, default='mobile')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'contacts'
        ordering = ['created_at']

    def __str__(self):
        return f"{self.number} ({self.tag})"


class DocumentFileType(models.TextChoices):
    PDF = 'PDF', 'PDF'
    IMAGE = 'Image', 'Image'
    WORD = 'Word', 'Word'
    TEXT = 'Text', 'Text'
    FILE = 'File', 'File'


class Document(models.Model):
    """Identity document stored inline as a data URL."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    person = models.ForeignKey(
        Person,
        on_delete=models.CASCADE,
        related_name='documents'
    )
    name = models.CharField(max_length=200)
    file_type = models.CharField(
        max_length=10,
        choices=DocumentFileType.choices,
        default=DocumentFileType.FILE
    )
    extension = models.CharField(max_length=10, blank=True)
    file_size = models.PositiveIntegerField(default=0)
    file_data = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'documents'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.file_type})"
