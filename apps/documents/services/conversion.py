"""Proforma to invoice conversion."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone
from uuid import UUID
from typing import Optional

from apps.payments.models import Payment
from ..models import Document, DocumentItem, DocumentType, DocumentStatus
from .document_management import ensure_number_available, save_document_checked
from .numbering import next_document_number, register_manual_number
from .payment_tracking import refresh_payment_totals
from .exceptions import DocumentNotFoundError, InvalidConversionError

logger = logging.getLogger(__name__)

User = get_user_model()

COPIED_FIELDS = [
    'client', 'client_name', 'due_date', 'subtotal', 'tax_rate', 'tax_amount',
    'total', 'labor_price', 'mandays', 'real_mandays', 'vat_applied', 'notes',
]


@transaction.atomic
def convert_proforma_to_invoice(
    *,
    user: User,
    proforma_id: UUID,
    document_number: Optional[str] = None
) -> Document:
    """
    Create an invoice from a proforma.

    The invoice copies the proforma's client, amounts, labor and items, is
    dated today and links back through converted_from. Payments recorded
    against the proforma move to the invoice. The proforma ends up
    CONVERTED and can no longer be edited.

    Raises:
        DocumentNotFoundError: If the proforma is missing or not the user's
        InvalidConversionError: Not a proforma, already converted, or cancelled
        DuplicateDocumentNumberError: If document_number is taken
    """
    try:
        proforma = Document.objects.select_for_update().get(id=proforma_id, user=user)
    except Document.DoesNotExist:
        raise DocumentNotFoundError("Document not found")

    if not proforma.is_proforma:
        raise InvalidConversionError("Only proformas can be converted to invoices")
    if proforma.status == DocumentStatus.CONVERTED or proforma.conversions.exists():
        raise InvalidConversionError("Proforma has already been converted")
    if proforma.status == DocumentStatus.CANCELLED:
        raise InvalidConversionError("Cancelled proformas cannot be converted")

    if document_number:
        ensure_number_available(
            user=user,
            document_type=DocumentType.INVOICE,
            document_number=document_number,
        )
        register_manual_number(
            user=user,
            document_type=DocumentType.INVOICE,
            document_number=document_number,
        )
    else:
        document_number = next_document_number(user=user, document_type=DocumentType.INVOICE)

    invoice = Document(
        user=user,
        type=DocumentType.INVOICE,
        document_number=document_number,
        date=timezone.localdate(),
        status=DocumentStatus.SENT if proforma.status == DocumentStatus.SENT else DocumentStatus.DRAFT,
        converted_from=proforma,
        **{field: getattr(proforma, field) for field in COPIED_FIELDS}
    )
    save_document_checked(invoice)

    DocumentItem.objects.bulk_create([
        DocumentItem(
            document=invoice,
            stock_item_id=item.stock_item_id,
            name=item.name,
            description=item.description,
            unit=item.unit,
            quantity=item.quantity,
            unit_price=item.unit_price,
            total=item.total,
            position=item.position,
        )
        for item in proforma.items.all()
    ])

    moved = (
        Payment.objects
        .filter(document=proforma)
        .update(document=invoice, invoice_number=invoice.document_number)
    )

    proforma.status = DocumentStatus.CONVERTED
    proforma.converted_at = timezone.now()
    proforma.save(update_fields=['status', 'converted_at', 'updated_at'])

    refresh_payment_totals(proforma)
    refresh_payment_totals(invoice)

    logger.info(
        "Converted proforma %s to invoice %s (%d payment(s) moved)",
        proforma.document_number, invoice.document_number, moved
    )
    return invoice
