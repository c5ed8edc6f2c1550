"""Data for a printable payment receipt."""

from django.contrib.auth import get_user_model
from uuid import UUID

from apps.preferences.services import get_user_settings
from .payment_management import get_payment

User = get_user_model()


def get_payment_receipt(*, user: User, payment_id: UUID) -> dict:
    """
    Everything a receipt shows: the payment, the document it pays, the
    company details and what is still left to pay.
    """
    payment = get_payment(user=user, payment_id=payment_id)
    document = payment.document

    return {
        'payment': payment,
        'document': document,
        'company': get_user_settings(user=user, exclude_logo=False),
        'remaining_balance': document.outstanding if document else None,
    }
