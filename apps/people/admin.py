# ==========================================
# apps/people/admin.py
# ==========================================

from django.contrib import admin
from apps.people.models import Person, Contact, Document


class ContactInline(admin.TabularInline):
    model = Contact
    extra = 0
    fields = ['number', 'tag']


class DocumentInline(admin.TabularInline):
    model = Document
    extra = 0
    fields = ['name', 'file_type', 'extension', 'file_size', 'created_at']
    readonly_fields = ['file_type', 'extension', 'file_size', 'created_at']
    can_delete = True
    show_change_link = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Person)
class PersonAdmin(admin.ModelAdmin):
    """Admin interface for customers."""

    list_display = [
        'name',
        'owner',
        'group',
        'last_paid_date',
        'last_paid_amount',
        'created_at'
    ]
    list_filter = ['group', 'created_at']
    search_fields = ['name', 'owner__email', 'contacts__number']
    readonly_fields = ['last_paid_date', 'last_paid_amount', 'created_at', 'updated_at']
    inlines = [ContactInline, DocumentInline]
    ordering = ['owner', 'name']


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    """Admin interface for stored documents."""

    list_display = ['name', 'person', 'file_type', 'file_size', 'created_at']
    list_filter = ['file_type', 'created_at']
    search_fields = ['name', 'person__name']
    exclude = ['file_data']
    readonly_fields = ['file_type', 'extension', 'file_size', 'created_at']
