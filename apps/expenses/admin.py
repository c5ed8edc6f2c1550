from django.contrib import admin
from .models import Expense


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ['expense_date', 'description', 'category', 'amount', 'user']
    list_filter = ['category']
    search_fields = ['description', 'category', 'user__email']
    date_hierarchy = 'expense_date'
    readonly_fields = ['id', 'created_at', 'updated_at']
    raw_id_fields = ['user']
