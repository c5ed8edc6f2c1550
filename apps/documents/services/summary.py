"""Aggregate figures for the documents overview."""

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import Count, Sum
from django.utils import timezone

from ..models import Document, DocumentType, DocumentStatus, PaymentState
from .payment_tracking import get_payment_status

User = get_user_model()


def get_documents_summary(*, user: User) -> dict:
    """
    Counts and sums per document type plus receivables.

    Outstanding and overdue figures only consider invoices that are not
    cancelled.
    """
    today = timezone.localdate()
    documents = Document.objects.filter(user=user)

    per_type = {
        row['type']: row
        for row in documents.values('type').annotate(count=Count('id'), amount=Sum('total'))
    }

    outstanding = Decimal('0.00')
    paid = Decimal('0.00')
    overdue_count = 0
    invoices = (
        documents
        .filter(type=DocumentType.INVOICE)
        .exclude(status=DocumentStatus.CANCELLED)
        .only('total', 'total_paid', 'date', 'due_date')
    )
    for invoice in invoices:
        paid += invoice.total_paid
        outstanding += invoice.outstanding
        if get_payment_status(invoice, today=today) == PaymentState.OVERDUE:
            overdue_count += 1

    def _figures(document_type):
        row = per_type.get(document_type, {})
        return {
            'count': row.get('count', 0),
            'total': row.get('amount') or Decimal('0.00'),
        }

    return {
        'proformas': _figures(DocumentType.PROFORMA),
        'invoices': _figures(DocumentType.INVOICE),
        'total_paid': paid,
        'total_outstanding': outstanding,
        'overdue_count': overdue_count,
    }
