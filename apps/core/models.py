from django.conf import settings
from django.db import models
import uuid


class Counter(models.Model):
    """
    Per-user sequence.

    Backs client numbers ('client') and document numbers ('INVOICE',
    'PROFORMA'). Values only ever grow.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='counters'
    )
    key = models.CharField(max_length=50)
    last_value = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'counters'
        constraints = [
            models.UniqueConstraint(fields=['user', 'key'], name='unique_counter_per_user'),
        ]

    def __str__(self):
        return f"{self.key}={self.last_value}"
