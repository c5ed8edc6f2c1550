"""Payment CRUD operations service."""

import logging
from datetime import date as date_type
from decimal import Decimal

from django.db import transaction
from django.db.models import Q
from django.contrib.auth import get_user_model
from django.utils import timezone
from uuid import UUID
from typing import Optional, Dict, Any

from apps.clients.models import Client
from apps.documents.models import Document
from apps.documents.services import refresh_payment_totals
from ..models import Payment, PaymentMethod
from .exceptions import PaymentNotFoundError, PaymentValidationError

logger = logging.getLogger(__name__)

User = get_user_model()

PLAIN_FIELDS = ['amount', 'payment_date', 'payment_method', 'reference', 'notes',
                'client_name', 'invoice_number']


def search_payments(
    *,
    user: User,
    client: Optional[UUID] = None,
    document: Optional[UUID] = None,
    unallocated: Optional[bool] = None,
    date_from: Optional[date_type] = None,
    date_to: Optional[date_type] = None,
    search: Optional[str] = None
):
    """Filter the user's payments, newest first."""
    queryset = Payment.objects.filter(user=user).select_related('document', 'client')

    if client:
        queryset = queryset.filter(client_id=client)
    if document:
        queryset = queryset.filter(document_id=document)
    if unallocated is True:
        queryset = queryset.unallocated()
    elif unallocated is False:
        queryset = queryset.allocated()
    if date_from:
        queryset = queryset.filter(payment_date__gte=date_from)
    if date_to:
        queryset = queryset.filter(payment_date__lte=date_to)
    if search:
        queryset = queryset.filter(
            Q(client_name__icontains=search) |
            Q(invoice_number__icontains=search) |
            Q(reference__icontains=search)
        )

    return queryset.order_by('-payment_date', '-created_at')


def get_payment(*, user: User, payment_id: UUID) -> Payment:
    try:
        return Payment.objects.select_related('document', 'client').get(id=payment_id, user=user)
    except Payment.DoesNotExist:
        raise PaymentNotFoundError("Payment not found")


def _resolve_document(*, user: User, document_id: Optional[UUID]) -> Optional[Document]:
    if document_id is None:
        return None
    try:
        return Document.objects.select_related('client').get(id=document_id, user=user)
    except Document.DoesNotExist:
        raise PaymentValidationError("Document not found")


def _resolve_client(*, user: User, client_id: Optional[UUID]) -> Optional[Client]:
    if client_id is None:
        return None
    try:
        return Client.objects.get(id=client_id, user=user)
    except Client.DoesNotExist:
        raise PaymentValidationError("Client not found")


def _link(payment: Payment, *, document: Optional[Document], client: Optional[Client]) -> None:
    """Attach document and client, filling the denormalized names."""
    payment.document = document
    if document is not None:
        payment.invoice_number = document.document_number
        if client is None and document.client_id:
            client = document.client
        if not payment.client_name:
            payment.client_name = document.client_name

    payment.client = client
    if client is not None and not payment.client_name:
        payment.client_name = client.name


@transaction.atomic
def create_payment(
    *,
    user: User,
    amount: Decimal,
    document_id: Optional[UUID] = None,
    client_id: Optional[UUID] = None,
    client_name: str = '',
    invoice_number: str = '',
    payment_date: Optional[date_type] = None,
    payment_method: str = PaymentMethod.CASH,
    reference: str = '',
    notes: str = ''
) -> Payment:
    """
    Create a payment. Without a document it is unallocated client credit.

    Raises:
        PaymentValidationError: If the document or client is not the user's,
            or the amount is not positive
    """
    if amount is None or amount <= 0:
        raise PaymentValidationError("Amount must be greater than zero")

    document = _resolve_document(user=user, document_id=document_id)
    client = _resolve_client(user=user, client_id=client_id)

    payment = Payment(
        user=user,
        amount=amount,
        payment_date=payment_date or timezone.localdate(),
        payment_method=payment_method or PaymentMethod.CASH,
        reference=reference or '',
        notes=notes or '',
        client_name=client_name or '',
        invoice_number=invoice_number or '',
    )
    _link(payment, document=document, client=client)
    payment.save()

    if document is not None:
        refresh_payment_totals(document)
    return payment


@transaction.atomic
def update_payment(*, user: User, payment_id: UUID, data: Dict[str, Any]) -> Payment:
    """
    Update a payment; both the previous and the new document get their
    totals recomputed.
    """
    try:
        payment = Payment.objects.select_for_update().get(id=payment_id, user=user)
    except Payment.DoesNotExist:
        raise PaymentNotFoundError("Payment not found")

    previous_document_id = payment.document_id

    for field in PLAIN_FIELDS:
        if field in data:
            value = data[field]
            if field not in ('amount', 'payment_date'):
                value = value or ''
            setattr(payment, field, value)

    if payment.amount is None or payment.amount <= 0:
        raise PaymentValidationError("Amount must be greater than zero")

    document = payment.document
    if 'document_id' in data:
        document = _resolve_document(user=user, document_id=data['document_id'])
        if document is None:
            payment.invoice_number = data.get('invoice_number') or ''

    client = payment.client
    if 'client_id' in data:
        client = _resolve_client(user=user, client_id=data['client_id'])
    _link(payment, document=document, client=client)
    payment.save()

    for document_id in {previous_document_id, payment.document_id} - {None}:
        refresh_payment_totals(Document.objects.get(id=document_id))
    return payment


@transaction.atomic
def delete_payment(*, user: User, payment_id: UUID) -> None:
    try:
        payment = Payment.objects.select_for_update().get(id=payment_id, user=user)
    except Payment.DoesNotExist:
        raise PaymentNotFoundError("Payment not found")

    document = payment.document
    payment.delete()
    if document is not None:
        refresh_payment_totals(document)
    logger.info("User %s deleted payment %s", user.pk, payment_id)
