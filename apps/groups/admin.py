# ==========================================
# apps/groups/admin.py
# ==========================================

from django.contrib import admin
from apps.groups.models import Group


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    """Admin interface for customer groups."""

    list_display = [
        'name',
        'owner',
        'people_count',
        'created_at'
    ]
    list_filter = ['created_at']
    search_fields = ['name', 'owner__email']
    readonly_fields = ['created_at']
    ordering = ['owner', 'name']

    def people_count(self, obj):
        """Show number of people in the group."""
        return obj.people.count()
    people_count.short_description = 'People'
