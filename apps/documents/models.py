from decimal import Decimal
from django.conf import settings
from django.db import models
import uuid


class DocumentType(models.TextChoices):
    PROFORMA = 'PROFORMA', 'Proforma'
    INVOICE = 'INVOICE', 'Invoice'


class DocumentStatus(models.TextChoices):
    DRAFT = 'DRAFT', 'Draft'
    SENT = 'SENT', 'Sent'
    PAID = 'PAID', 'Paid'
    CANCELLED = 'CANCELLED', 'Cancelled'
    CONVERTED = 'CONVERTED', 'Converted'


class PaymentState(models.TextChoices):
    """Derived payment state of an invoice, never stored."""
    PAID = 'paid', 'Paid'
    PARTIAL = 'partial', 'Partially paid'
    OVERDUE = 'overdue', 'Overdue'
    UNPAID = 'unpaid', 'Unpaid'


class Document(models.Model):
    """
    Proforma or invoice issued to a client.

    Amounts are computed by the documents services from the item lines,
    labor price and billed mandays; `total_paid` is maintained from the
    payments that reference the document.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='documents'
    )

    type = models.CharField(max_length=10, choices=DocumentType.choices)
    document_number = models.CharField(max_length=50)

    client = models.ForeignKey(
        'clients.Client',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='documents'
    )
    client_name = models.CharField(max_length=255, blank=True)

    date = models.DateField()
    due_date = models.DateField(null=True, blank=True)

    # Amounts
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    tax_rate = models.DecimalField(max_digits=6, decimal_places=4, default=Decimal('0'))
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total_paid = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    # Labor
    labor_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    mandays = models.JSONField(null=True, blank=True)
    real_mandays = models.JSONField(null=True, blank=True)

    vat_applied = models.BooleanField(default=False)
    notes = models.TextField(blank=True)
    status = models.CharField(
        max_length=10,
        choices=DocumentStatus.choices,
        default=DocumentStatus.DRAFT
    )

    # Conversion
    converted_from = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='conversions'
    )
    converted_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'documents'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'type', '-created_at'], name='documents_user_type_idx'),
            models.Index(fields=['user', 'status'], name='documents_user_status_idx'),
            models.Index(fields=['document_number'], name='documents_number_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'type', 'document_number'],
                name='unique_document_number_per_user_type'
            ),
        ]

    def __str__(self):
        return f"{self.get_type_display()} {self.document_number}"

    @property
    def is_invoice(self):
        return self.type == DocumentType.INVOICE

    @property
    def is_proforma(self):
        return self.type == DocumentType.PROFORMA

    @property
    def outstanding(self):
        return max(self.total - self.total_paid, Decimal('0.00'))

    @property
    def converted_to(self):
        """Invoice created from this proforma, if any."""
        # Served from prefetch_related when present
        return next(iter(self.conversions.all()), None)


class DocumentItem(models.Model):
    """One line on a document."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    document = models.ForeignKey(
        Document,
        on_delete=models.CASCADE,
        related_name='items'
    )
    stock_item = models.ForeignKey(
        'stock.StockItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='document_items'
    )

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    unit = models.CharField(max_length=30, blank=True)
    quantity = models.DecimalField(max_digits=12, decimal_places=3)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    total = models.DecimalField(max_digits=12, decimal_places=2)
    position = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'document_items'
        ordering = ['position', 'created_at']

    def __str__(self):
        return f"{self.name} x {self.quantity}"
