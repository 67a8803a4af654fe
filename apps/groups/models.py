# ==========================================
# apps/groups/models.py
# ==========================================

from django.db import models
import uuid


class Group(models.Model):
    """Customer group. A plain tag owned by one shop owner."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    owner = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='customer_groups')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'customer_groups'
        indexes = [
            models.Index(fields=['owner', 'name'], name='customer_groups_owner_name_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name

    def is_owned_by(self, user):
        return self.owner_id == user.pk
