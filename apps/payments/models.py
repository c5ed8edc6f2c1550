from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
import uuid


class PaymentMethod(models.TextChoices):
    CASH = 'cash', 'Cash'
    BANK_TRANSFER = 'bank_transfer', 'Bank transfer'
    CHECK = 'check', 'Check'
    CARD = 'card', 'Card'
    OTHER = 'other', 'Other'


class PaymentQuerySet(models.QuerySet):

    def unallocated(self):
        """Client credit: money received but not applied to any document."""
        return self.filter(document__isnull=True)

    def allocated(self):
        return self.filter(document__isnull=False)


class Payment(models.Model):
    """
    Money received from a client.

    A payment linked to a document counts towards that document's
    `total_paid`. A payment without a document is unallocated credit on
    the client's account.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='payments'
    )
    document = models.ForeignKey(
        'documents.Document',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='payments'
    )
    client = models.ForeignKey(
        'clients.Client',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='payments'
    )
    client_name = models.CharField(max_length=255, blank=True)
    invoice_number = models.CharField(max_length=50, blank=True)

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    payment_date = models.DateField()
    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.CASH
    )
    reference = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PaymentQuerySet.as_manager()

    class Meta:
        db_table = 'payments'
        ordering = ['-payment_date', '-created_at']
        indexes = [
            models.Index(fields=['user', '-payment_date'], name='payments_user_date_idx'),
            models.Index(fields=['client', 'payment_date'], name='payments_client_date_idx'),
        ]

    def __str__(self):
        return f"{self.amount} from {self.client_name or 'unknown client'}"

    @property
    def is_unallocated(self):
        return self.document_id is None
