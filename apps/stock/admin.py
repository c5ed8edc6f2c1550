from django.contrib import admin
from .models import StockItem


@admin.register(StockItem)
class StockItemAdmin(admin.ModelAdmin):
    list_display = [
        'name',
        'category',
        'selling_price',
        'quantity',
        'min_quantity',
        'supplier_name',
        'user',
    ]
    list_filter = ['category', 'created_at']
    search_fields = ['name', 'sku', 'part_number', 'brand', 'supplier_name', 'user__email']
    readonly_fields = ['id', 'created_at', 'updated_at']
    raw_id_fields = ['user', 'supplier']
