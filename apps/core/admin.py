from django.contrib import admin
from .models import Counter


@admin.register(Counter)
class CounterAdmin(admin.ModelAdmin):
    """Counters are maintained by the services, so only inspection is offered."""

    list_display = ['user', 'key', 'last_value', 'updated_at']
    list_filter = ['key']
    search_fields = ['user__email', 'key']
    readonly_fields = ['created_at', 'updated_at']
