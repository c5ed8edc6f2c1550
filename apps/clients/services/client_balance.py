"""Client account credit (unallocated payments)."""

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import Sum
from uuid import UUID

from apps.payments.models import Payment
from .client_management import get_client

User = get_user_model()


def get_unallocated_payments(*, user: User, client_id: UUID):
    """Unallocated payments of a client, oldest first (FIFO order)."""
    return (
        Payment.objects
        .unallocated()
        .filter(user=user, client_id=client_id)
        .order_by('payment_date', 'created_at')
    )


def get_client_balance(*, user: User, client_id: UUID) -> dict:
    """
    Credit a client holds on their account.

    Returns:
        dict with the client, the balance and the payments forming it

    Raises:
        ClientNotFoundError: If the client is missing or owned by someone else
    """
    client = get_client(user=user, client_id=client_id)
    payments = get_unallocated_payments(user=user, client_id=client.id)
    balance = payments.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')

    return {
        'client': client,
        'balance': balance,
        'payments': list(payments),
    }
