"""
Submission Django Admin Configuration
"""
from django.contrib import admin
from .models import Submission


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    """Read-only admin interface for submissions."""

    list_display = [
        'name', 'email', 'phone', 'created_at'
    ]

    list_filter = [
        'created_at'
    ]

    search_fields = [
        'name', 'email', 'message'
    ]

    readonly_fields = [
        'id', 'name', 'email', 'phone', 'message',
        'created_at', 'updated_at'
    ]

    fieldsets = (
        ('Contact Information', {
            'fields': ('name', 'email', 'phone', 'message')
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def has_add_permission(self, request):
        """Submissions only come in through the public form."""
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False
