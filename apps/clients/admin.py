from django.contrib import admin
from .models import Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ['name', 'client_number', 'email', 'phone', 'user', 'created_at']
    list_filter = ['created_at']
    search_fields = ['name', 'email', 'phone', 'location', 'vat_number', 'user__email']
    readonly_fields = ['id', 'created_at', 'updated_at']
    raw_id_fields = ['user']
