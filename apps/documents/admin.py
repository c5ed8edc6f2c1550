from django.contrib import admin
from .models import Document, DocumentItem


class DocumentItemInline(admin.TabularInline):
    model = DocumentItem
    extra = 0
    fields = ['position', 'name', 'quantity', 'unit_price', 'total', 'stock_item']
    readonly_fields = ['total']
    raw_id_fields = ['stock_item']


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = [
        'document_number',
        'type',
        'client_name',
        'date',
        'total',
        'total_paid',
        'status',
        'user',
    ]
    list_filter = ['type', 'status', 'vat_applied', 'date']
    search_fields = ['document_number', 'client_name', 'user__email']
    date_hierarchy = 'date'
    readonly_fields = [
        'id',
        'subtotal',
        'tax_amount',
        'total',
        'total_paid',
        'converted_from',
        'converted_at',
        'created_at',
        'updated_at',
    ]
    raw_id_fields = ['user', 'client']
    inlines = [DocumentItemInline]
