from django.conf import settings
from django.db import models
import uuid


class Client(models.Model):
    """Customer that proformas and invoices are issued to."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='clients'
    )

    client_number = models.PositiveIntegerField(null=True, blank=True)
    name = models.CharField(max_length=255)
    email = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=50, blank=True)
    location = models.CharField(max_length=255, blank=True)
    vat_number = models.CharField(max_length=50, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'clients'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='clients_user_created_idx'),
            models.Index(fields=['user', 'name'], name='clients_user_name_idx'),
        ]

    def __str__(self):
        return self.name
