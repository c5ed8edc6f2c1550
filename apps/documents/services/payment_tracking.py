"""Keep document payment totals and derived payment state in sync."""

import logging
from datetime import date, timedelta
from decimal import Decimal

from django.conf import settings
from django.db.models import Sum
from django.utils import timezone

from ..models import Document, DocumentStatus, PaymentState

logger = logging.getLogger(__name__)


def is_fully_paid(document: Document) -> bool:
    return document.total > 0 and document.total_paid >= document.total


def is_overdue(document: Document, today: date = None) -> bool:
    """
    Unpaid past the due date, or, without a due date, older than
    OVERDUE_AFTER_DAYS.
    """
    today = today or timezone.localdate()
    if document.due_date:
        return document.due_date < today
    return document.date < today - timedelta(days=settings.OVERDUE_AFTER_DAYS)


def get_payment_status(document: Document, today: date = None) -> str:
    """Classify a document as paid, partial, overdue or unpaid."""
    if is_fully_paid(document):
        return PaymentState.PAID
    if document.total_paid > 0:
        return PaymentState.PARTIAL
    if is_overdue(document, today=today):
        return PaymentState.OVERDUE
    return PaymentState.UNPAID


def refresh_payment_totals(document: Document) -> Document:
    """
    Recompute total_paid from the document's payments.

    Invoices become PAID once fully paid and fall back to SENT when a
    payment change leaves them short. Cancelled documents keep their status.
    """
    paid = document.payments.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')
    document.total_paid = paid

    if document.is_invoice and document.status != DocumentStatus.CANCELLED:
        if is_fully_paid(document) and document.status in (DocumentStatus.DRAFT, DocumentStatus.SENT):
            logger.info("Invoice %s is fully paid", document.document_number)
            document.status = DocumentStatus.PAID
        elif document.status == DocumentStatus.PAID and not is_fully_paid(document):
            logger.info("Invoice %s is no longer fully paid", document.document_number)
            document.status = DocumentStatus.SENT

    document.save(update_fields=['total_paid', 'status', 'updated_at'])
    return document
