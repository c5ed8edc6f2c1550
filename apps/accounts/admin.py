from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.db.models import Count
from django.utils.html import format_html

from apps.core.cache import invalidate_user_cache
from .models import User

CACHED_RESOURCES = ('clients', 'suppliers', 'stock', 'documents', 'payments', 'expenses')

BADGE = (
    '<span style="background: {}; color: white; padding: 3px 8px; '
    'border-radius: 10px; font-size: 11px;">{}</span>'
)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Tenants of the invoicing API.

    Shows how much data each account holds and who can open the admin
    dashboard (staff or ADMIN_EMAILS).
    """

    list_display = [
        'email',
        'name',
        'status_badge',
        'dashboard_badge',
        'client_count',
        'document_count',
        'created_at',
        'last_login',
    ]
    list_filter = ['is_active', 'is_staff', 'created_at']
    search_fields = ['email', 'name']
    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        (None, {
            'fields': ('email', 'name', 'password')
        }),
        ('Access', {
            'fields': ('is_active', 'is_staff', 'is_superuser'),
            'description': 'Staff users can open the admin dashboard endpoints.',
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'name', 'password1', 'password2', 'is_staff'),
        }),
    )
    readonly_fields = ['created_at', 'updated_at', 'last_login']
    filter_horizontal = []

    actions = ['activate_users', 'deactivate_users', 'reset_cached_responses']

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            client_total=Count('clients', distinct=True),
            document_total=Count('documents', distinct=True),
        )

    @admin.display(description='Status', ordering='is_active')
    def status_badge(self, obj):
        if obj.is_active:
            return format_html(BADGE, '#4F7A5A', 'Active')
        return format_html(BADGE, '#B85C5C', 'Inactive')

    @admin.display(description='Dashboard')
    def dashboard_badge(self, obj):
        if obj.is_dashboard_admin:
            return format_html(BADGE, '#3B5B8C', 'Admin')
        return '-'

    @admin.display(description='Clients', ordering='client_total')
    def client_count(self, obj):
        return obj.client_total

    @admin.display(description='Documents', ordering='document_total')
    def document_count(self, obj):
        return obj.document_total

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Superusers are never deactivated from here."""
        count = queryset.filter(is_superuser=False).update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)

    @admin.action(description='Drop cached API responses')
    def reset_cached_responses(self, request, queryset):
        for user_id in queryset.values_list('id', flat=True):
            invalidate_user_cache(user_id, *CACHED_RESOURCES)
        self.message_user(request, f'Cleared cached responses of {queryset.count()} user(s).')
