from django.contrib import admin
from .models import UserSettings


@admin.register(UserSettings)
class UserSettingsAdmin(admin.ModelAdmin):
    list_display = ['user', 'company_name', 'currency', 'tax_rate', 'updated_at']
    search_fields = ['user__email', 'company_name']
    readonly_fields = ['id', 'created_at', 'updated_at']
    raw_id_fields = ['user']
