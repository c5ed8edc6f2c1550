from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
import uuid


class StockItem(models.Model):
    """Product or material that can be put on a document line."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='stock_items'
    )

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=100, blank=True, db_index=True)
    unit = models.CharField(max_length=30, blank=True)

    # Pricing and inventory
    buying_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    selling_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    quantity = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    min_quantity = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))

    # Technical details
    brand = models.CharField(max_length=100, blank=True)
    model = models.CharField(max_length=100, blank=True)
    part_number = models.CharField(max_length=100, blank=True, db_index=True)
    sku = models.CharField(max_length=100, blank=True, db_index=True)
    specifications = models.TextField(blank=True)
    voltage = models.CharField(max_length=50, blank=True)
    power = models.CharField(max_length=50, blank=True)
    material = models.CharField(max_length=100, blank=True)
    size = models.CharField(max_length=100, blank=True)
    weight = models.CharField(max_length=50, blank=True)
    color = models.CharField(max_length=50, blank=True)

    # Supplier
    supplier = models.ForeignKey(
        'suppliers.Supplier',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='stock_items'
    )
    supplier_name = models.CharField(max_length=255, blank=True)
    supplier_code = models.CharField(max_length=100, blank=True)

    warranty = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'stock_items'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='stock_user_created_idx'),
            models.Index(fields=['user', 'category'], name='stock_user_category_idx'),
        ]

    def __str__(self):
        return self.name

    @property
    def is_low_stock(self):
        return self.min_quantity > 0 and self.quantity <= self.min_quantity
