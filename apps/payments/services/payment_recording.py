"""
Recording payments against invoices.

Two modes:
- new money: one payment for min(amount, outstanding); any excess becomes
  unallocated credit on the client's account
- client balance: existing unallocated payments are applied oldest first,
  splitting the last one when only part of it is needed
"""

import logging
from datetime import date as date_type
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum
from django.contrib.auth import get_user_model
from django.utils import timezone
from uuid import UUID
from typing import Optional

from apps.documents.models import Document, DocumentStatus
from apps.documents.services import refresh_payment_totals
from ..models import Payment, PaymentMethod
from .exceptions import (
    InvoiceNotFoundError,
    PaymentNotAllowedError,
    PaymentValidationError,
    InsufficientBalanceError,
)

logger = logging.getLogger(__name__)

User = get_user_model()

EXCESS_NOTE = ' | Excess payment added to client account (invoice fully paid)'
SPLIT_NOTE = ' | Split from original payment'


def lockable_invoices(*, user: User):
    """
    The user's documents, locked row by row on read.

    Only the document row is locked: the client is outer-joined and
    PostgreSQL refuses FOR UPDATE on the nullable side of an outer join.
    """
    return (
        Document.objects
        .select_for_update(of=('self',))
        .select_related('client')
        .filter(user=user)
    )


def _lock_invoice(*, user: User, document_id: UUID) -> Document:
    try:
        invoice = lockable_invoices(user=user).get(id=document_id)
    except Document.DoesNotExist:
        raise InvoiceNotFoundError("Invoice not found")

    if not invoice.is_invoice:
        raise PaymentNotAllowedError("Payments can only be recorded against invoices")
    if invoice.status == DocumentStatus.CANCELLED:
        raise PaymentNotAllowedError("Cannot record payments on a cancelled invoice")
    if invoice.client_id is None:
        raise PaymentNotAllowedError("Invoice has no client")
    return invoice


def _outstanding(invoice: Document) -> Decimal:
    paid = invoice.payments.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')
    return max(invoice.total - paid, Decimal('0.00'))


@transaction.atomic
def record_invoice_payment(
    *,
    user: User,
    document_id: UUID,
    amount: Optional[Decimal] = None,
    payment_date: Optional[date_type] = None,
    payment_method: str = PaymentMethod.CASH,
    reference: str = '',
    notes: str = '',
    use_client_balance: bool = False
) -> dict:
    """
    Pay an invoice.

    Args:
        amount: Money received. Optional with use_client_balance, where it
            defaults to the whole outstanding amount.
        use_client_balance: Settle from the client's unallocated payments
            instead of recording new money

    Returns:
        dict with the invoice, the allocated payments and the credit created
        from an overpayment (None when there was no excess)

    Raises:
        InvoiceNotFoundError: If the invoice is missing or not the user's
        PaymentNotAllowedError: Proforma, cancelled, no client, already paid
        PaymentValidationError: If amount is not positive
        InsufficientBalanceError: If the client's credit is too small
    """
    invoice = _lock_invoice(user=user, document_id=document_id)
    outstanding = _outstanding(invoice)
    if outstanding <= 0:
        raise PaymentNotAllowedError("Invoice is already fully paid")

    if amount is None:
        if not use_client_balance:
            raise PaymentValidationError("Amount is required")
        amount = outstanding
    if amount <= 0:
        raise PaymentValidationError("Amount must be greater than zero")

    amount_to_pay = min(amount, outstanding)

    if use_client_balance:
        allocated = _allocate_client_credit(invoice=invoice, amount=amount_to_pay)
        credit = None
    else:
        payment_date = payment_date or timezone.localdate()
        allocated = [Payment.objects.create(
            user=user,
            document=invoice,
            client=invoice.client,
            client_name=invoice.client_name or invoice.client.name,
            invoice_number=invoice.document_number,
            amount=amount_to_pay,
            payment_date=payment_date,
            payment_method=payment_method or PaymentMethod.CASH,
            reference=reference or '',
            notes=notes or '',
        )]

        credit = None
        excess = amount - amount_to_pay
        if excess > 0:
            credit = Payment.objects.create(
                user=user,
                client=invoice.client,
                client_name=invoice.client_name or invoice.client.name,
                amount=excess,
                payment_date=payment_date,
                payment_method=payment_method or PaymentMethod.CASH,
                reference=reference or '',
                notes=(notes or '') + EXCESS_NOTE,
            )
            logger.info(
                "Excess payment of %s added to account of client %s",
                excess, invoice.client_id
            )

    refresh_payment_totals(invoice)
    logger.info("Recorded %s on invoice %s", amount_to_pay, invoice.document_number)
    return {
        'invoice': invoice,
        'payments': allocated,
        'credit': credit,
    }


def _allocate_client_credit(*, invoice: Document, amount: Decimal):
    """Move unallocated payments onto the invoice, FIFO by payment date."""
    credits = list(
        Payment.objects
        .select_for_update()
        .unallocated()
        .filter(user=invoice.user, client_id=invoice.client_id)
        .order_by('payment_date', 'created_at')
    )
    available = sum((p.amount for p in credits), Decimal('0.00'))
    if available < amount:
        raise InsufficientBalanceError(
            f"Insufficient client balance. Available: {available:.2f}, Required: {amount:.2f}"
        )

    number = invoice.document_number
    remaining = amount
    allocated = []
    for credit in credits:
        if remaining <= 0:
            break

        if credit.amount <= remaining:
            credit.document = invoice
            credit.invoice_number = number
            credit.notes = (credit.notes or '') + f' | Allocated to invoice {number}'
            credit.save(update_fields=['document', 'invoice_number', 'notes', 'updated_at'])
            remaining -= credit.amount
        else:
            leftover = credit.amount - remaining
            original_notes = credit.notes or ''
            credit.amount = remaining
            credit.document = invoice
            credit.invoice_number = number
            credit.notes = original_notes + f' | Partially allocated to invoice {number}'
            credit.save(update_fields=['amount', 'document', 'invoice_number', 'notes', 'updated_at'])

            Payment.objects.create(
                user=credit.user,
                client_id=credit.client_id,
                client_name=credit.client_name,
                amount=leftover,
                payment_date=credit.payment_date,
                payment_method=credit.payment_method,
                reference=credit.reference,
                notes=original_notes + SPLIT_NOTE,
            )
            remaining = Decimal('0.00')
        allocated.append(credit)

    logger.info(
        "Allocated %s of client %s credit to invoice %s",
        amount, invoice.client_id, number
    )
    return allocated
