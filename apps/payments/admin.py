from django.contrib import admin
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = [
        'payment_date',
        'amount',
        'client_name',
        'invoice_number',
        'payment_method',
        'is_unallocated',
        'user',
    ]
    list_filter = ['payment_method', 'payment_date']
    search_fields = ['client_name', 'invoice_number', 'reference', 'user__email']
    date_hierarchy = 'payment_date'
    readonly_fields = ['id', 'created_at', 'updated_at']
    raw_id_fields = ['user', 'document', 'client']

    @admin.display(boolean=True, description='Credit')
    def is_unallocated(self, obj):
        return obj.is_unallocated
