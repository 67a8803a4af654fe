# ==========================================
# apps/transactions/admin.py
# ==========================================

from django.contrib import admin
from django.db import transaction

from apps.people.models import Person
from apps.transactions.models import Transaction


def _refresh_people(person_ids):
    for person in Person.objects.select_for_update().filter(id__in=set(person_ids)):
        person.refresh_last_payment()


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """Admin interface for ledger entries. Every write refreshes the last-payment cache."""

    list_display = [
        'person',
        'kind',
        'amount',
        'note',
        'created_at'
    ]
    list_filter = ['kind', 'created_at']
    search_fields = ['person__name', 'note']
    readonly_fields = ['updated_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    raw_id_fields = ['person']

    @transaction.atomic
    def save_model(self, request, obj, form, change):
        person_ids = [obj.person_id]
        if change and 'person' in form.changed_data:
            # Entry moved to another person; the previous owner loses it
            person_ids.append(form.initial['person'])

        super().save_model(request, obj, form, change)
        _refresh_people(person_ids)

    @transaction.atomic
    def delete_model(self, request, obj):
        person_id = obj.person_id
        super().delete_model(request, obj)
        _refresh_people([person_id])

    @transaction.atomic
    def delete_queryset(self, request, queryset):
        person_ids = list(queryset.values_list('person_id', flat=True).distinct())
        super().delete_queryset(request, queryset)
        _refresh_people(person_ids)
