from decimal import Decimal
from django.conf import settings
from django.db import models
import uuid

DEFAULT_FOOTER_MESSAGE = 'Thank you for your business!'
DEFAULT_CURRENCY = 'USD'


class UserSettings(models.Model):
    """Company details printed on documents and receipts, one row per user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='preferences'
    )

    company_name = models.CharField(max_length=255, blank=True)
    company_address = models.TextField(blank=True)
    company_phone = models.CharField(max_length=50, blank=True)
    company_email = models.CharField(max_length=255, blank=True)
    company_vat_number = models.CharField(max_length=50, blank=True)
    logo = models.TextField(blank=True, help_text='Logo as a data URL')
    footer_message = models.TextField(default=DEFAULT_FOOTER_MESSAGE, blank=True)
    tax_rate = models.DecimalField(max_digits=6, decimal_places=4, default=Decimal('0'))
    currency = models.CharField(max_length=3, default=DEFAULT_CURRENCY)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_settings'
        verbose_name = 'user settings'
        verbose_name_plural = 'user settings'

    def __str__(self):
        return f"Settings for {self.user}"
