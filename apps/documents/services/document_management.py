"""Document CRUD operations service."""

import logging
from datetime import date as date_type
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.db.models import Q
from django.contrib.auth import get_user_model
from django.utils import timezone
from uuid import UUID
from typing import Optional, Dict, Any, List

from apps.clients.models import Client
from apps.stock.models import StockItem
from ..models import Document, DocumentItem, DocumentType, DocumentStatus
from .calculations import line_total, mandays_cost, calculate_totals, resolve_tax_rate
from .numbering import next_document_number, register_manual_number
from .payment_tracking import refresh_payment_totals
from .exceptions import (
    DocumentNotFoundError,
    DocumentValidationError,
    DuplicateDocumentNumberError,
    DocumentLockedError,
    InvalidStatusTransitionError,
)

logger = logging.getLogger(__name__)

User = get_user_model()

HEADER_FIELDS = ['client_name', 'date', 'due_date', 'labor_price', 'mandays', 'real_mandays',
                 'vat_applied', 'notes', 'status']

# PAID follows from payments, CANCELLED and CONVERTED have their own operations
SETTABLE_STATUSES = (DocumentStatus.DRAFT, DocumentStatus.SENT)


def search_documents(
    *,
    user: User,
    type: Optional[str] = None,
    status: Optional[str] = None,
    client: Optional[UUID] = None,
    date_from: Optional[date_type] = None,
    date_to: Optional[date_type] = None,
    search: Optional[str] = None
):
    """Filter the user's documents, newest first."""
    queryset = (
        Document.objects
        .filter(user=user)
        .select_related('client')
        .prefetch_related('items', 'conversions')
    )

    if type:
        queryset = queryset.filter(type=type)
    if status:
        queryset = queryset.filter(status=status)
    if client:
        queryset = queryset.filter(client_id=client)
    if date_from:
        queryset = queryset.filter(date__gte=date_from)
    if date_to:
        queryset = queryset.filter(date__lte=date_to)
    if search:
        queryset = queryset.filter(
            Q(document_number__icontains=search) |
            Q(client_name__icontains=search)
        )

    return queryset.order_by('-created_at')


def get_document(*, user: User, document_id: UUID) -> Document:
    try:
        return (
            Document.objects
            .select_related('client', 'converted_from')
            .prefetch_related('items', 'payments', 'conversions')
            .get(id=document_id, user=user)
        )
    except Document.DoesNotExist:
        raise DocumentNotFoundError("Document not found")


def _resolve_client(*, user: User, client_id: Optional[UUID]) -> Optional[Client]:
    if client_id is None:
        return None
    try:
        return Client.objects.get(id=client_id, user=user)
    except Client.DoesNotExist:
        raise DocumentValidationError("Client not found")


def _prepare_items(*, user: User, items: List[Dict[str, Any]]) -> List[DocumentItem]:
    """
    Build unsaved DocumentItem rows.

    Lines linked to a stock item default their name, unit and price from it.
    """
    stock_ids = {item['stock_item_id'] for item in items if item.get('stock_item_id')}
    stock = {s.id: s for s in StockItem.objects.filter(user=user, id__in=stock_ids)}

    prepared = []
    for position, data in enumerate(items):
        stock_item = None
        if data.get('stock_item_id'):
            stock_item = stock.get(data['stock_item_id'])
            if stock_item is None:
                raise DocumentValidationError("Stock item not found")

        name = (data.get('name') or (stock_item.name if stock_item else '')).strip()
        if not name:
            raise DocumentValidationError(f"Item {position + 1}: name is required")

        unit_price = data.get('unit_price')
        if unit_price is None:
            unit_price = stock_item.selling_price if stock_item else Decimal('0.00')
        quantity = data['quantity']

        prepared.append(DocumentItem(
            stock_item=stock_item,
            name=name,
            description=data.get('description') or '',
            unit=data.get('unit') or (stock_item.unit if stock_item else ''),
            quantity=quantity,
            unit_price=unit_price,
            total=line_total(quantity, unit_price),
            position=position,
        ))
    return prepared


def ensure_number_available(*, user, document_type, document_number, exclude_id=None):
    clash = Document.objects.filter(
        user=user, type=document_type, document_number=document_number
    )
    if exclude_id:
        clash = clash.exclude(id=exclude_id)
    if clash.exists():
        raise DuplicateDocumentNumberError(
            f"Document number {document_number} already exists"
        )


def _validate_billable(*, client, client_name, items, labor_price, mandays):
    if client is None and not (client_name or '').strip():
        raise DocumentValidationError("A client is required")
    if not items and not (labor_price and labor_price > 0) and mandays_cost(mandays) <= 0:
        raise DocumentValidationError(
            "Add at least one item, a labor price or mandays"
        )


def _apply_totals(document: Document, items: List[DocumentItem], requested_tax_rate=None):
    document.tax_rate = resolve_tax_rate(
        user=document.user,
        vat_applied=document.vat_applied,
        requested=requested_tax_rate,
    )
    totals = calculate_totals(
        line_totals=[item.total for item in items],
        labor_price=document.labor_price,
        mandays=document.mandays,
        vat_applied=document.vat_applied,
        tax_rate=document.tax_rate,
    )
    for field, value in totals.items():
        setattr(document, field, value)


def save_document_checked(document: Document) -> None:
    try:
        with transaction.atomic():
            document.save()
    except IntegrityError:
        raise DuplicateDocumentNumberError(
            f"Document number {document.document_number} already exists"
        )


@transaction.atomic
def create_document(
    *,
    user: User,
    type: str,
    items: Optional[List[Dict[str, Any]]] = None,
    document_number: Optional[str] = None,
    client_id: Optional[UUID] = None,
    client_name: str = '',
    date: Optional[date_type] = None,
    due_date: Optional[date_type] = None,
    labor_price: Decimal = Decimal('0.00'),
    mandays: Optional[Dict[str, Any]] = None,
    real_mandays: Optional[Dict[str, Any]] = None,
    vat_applied: bool = False,
    tax_rate: Optional[Decimal] = None,
    notes: str = '',
    status: str = DocumentStatus.DRAFT
) -> Document:
    """
    Create a proforma or invoice.

    Line totals, subtotal, tax and total are always computed here. A number
    is generated when none is given; client_name is copied from the client
    when left blank.

    Raises:
        DocumentValidationError: Missing client, nothing billable, foreign client/stock
        DuplicateDocumentNumberError: Number already used for this type
    """
    if type not in DocumentType.values:
        raise DocumentValidationError("Invalid document type")
    status = status or DocumentStatus.DRAFT
    if status not in SETTABLE_STATUSES:
        raise DocumentValidationError("Status must be DRAFT or SENT")

    items = items or []
    client = _resolve_client(user=user, client_id=client_id)
    labor_price = labor_price or Decimal('0.00')
    _validate_billable(
        client=client,
        client_name=client_name,
        items=items,
        labor_price=labor_price,
        mandays=mandays,
    )

    if document_number:
        ensure_number_available(user=user, document_type=type, document_number=document_number)
        register_manual_number(user=user, document_type=type, document_number=document_number)
    else:
        document_number = next_document_number(user=user, document_type=type)

    prepared_items = _prepare_items(user=user, items=items)

    document = Document(
        user=user,
        type=type,
        document_number=document_number,
        client=client,
        client_name=(client_name or '').strip() or (client.name if client else ''),
        date=date or timezone.localdate(),
        due_date=due_date,
        labor_price=labor_price,
        mandays=mandays,
        real_mandays=real_mandays,
        vat_applied=vat_applied,
        notes=notes or '',
        status=status,
    )
    _apply_totals(document, prepared_items, requested_tax_rate=tax_rate)
    save_document_checked(document)

    for item in prepared_items:
        item.document = document
    DocumentItem.objects.bulk_create(prepared_items)
    refresh_payment_totals(document)

    logger.info("User %s created %s %s", user.pk, type, document_number)
    return document


@transaction.atomic
def update_document(*, user: User, document_id: UUID, data: Dict[str, Any]) -> Document:
    """
    Update a document and recompute its totals.

    Items are replaced when `items` is present in data. The document type
    never changes.

    Raises:
        DocumentNotFoundError: If the document doesn't exist
        DocumentLockedError: If the document is a converted proforma
        DocumentValidationError: If the result would be invalid
        DuplicateDocumentNumberError: If the new number is taken
    """
    try:
        document = Document.objects.select_for_update().get(id=document_id, user=user)
    except Document.DoesNotExist:
        raise DocumentNotFoundError("Document not found")

    if document.status == DocumentStatus.CONVERTED:
        raise DocumentLockedError("Converted proformas cannot be edited")

    if data.get('status') and data['status'] not in SETTABLE_STATUSES:
        raise DocumentValidationError("Status must be DRAFT or SENT")

    new_number = data.get('document_number')
    if new_number and new_number != document.document_number:
        ensure_number_available(
            user=user,
            document_type=document.type,
            document_number=new_number,
            exclude_id=document.id,
        )
        register_manual_number(user=user, document_type=document.type, document_number=new_number)
        document.document_number = new_number

    if 'client_id' in data:
        document.client = _resolve_client(user=user, client_id=data['client_id'])
        if 'client_name' not in data and document.client:
            document.client_name = document.client.name

    for field in HEADER_FIELDS:
        if field in data:
            value = data[field]
            if field in ('client_name', 'notes'):
                value = value or ''
            setattr(document, field, value)
    document.labor_price = document.labor_price or Decimal('0.00')

    if 'items' in data:
        prepared_items = _prepare_items(user=user, items=data['items'] or [])
    else:
        prepared_items = list(document.items.all())

    _validate_billable(
        client=document.client,
        client_name=document.client_name,
        items=prepared_items,
        labor_price=document.labor_price,
        mandays=document.mandays,
    )

    requested_rate = data.get('tax_rate')
    if requested_rate is None and 'vat_applied' not in data and document.vat_applied:
        requested_rate = document.tax_rate
    _apply_totals(document, prepared_items, requested_tax_rate=requested_rate)
    save_document_checked(document)

    if 'items' in data:
        document.items.all().delete()
        for item in prepared_items:
            item.document = document
        DocumentItem.objects.bulk_create(prepared_items)

    refresh_payment_totals(document)
    return document


@transaction.atomic
def delete_document(*, user: User, document_id: UUID) -> None:
    """
    Delete a document with its items and payments.

    Deleting an invoice that came from a proforma puts the proforma back to
    DRAFT so it can be converted again.
    """
    try:
        document = Document.objects.select_for_update().get(id=document_id, user=user)
    except Document.DoesNotExist:
        raise DocumentNotFoundError("Document not found")

    source = document.converted_from
    document.delete()

    if source is not None and source.status == DocumentStatus.CONVERTED:
        source.status = DocumentStatus.DRAFT
        source.converted_at = None
        source.save(update_fields=['status', 'converted_at', 'updated_at'])
        logger.info("Proforma %s reverted to draft", source.document_number)

    logger.info("User %s deleted %s %s", user.pk, document.type, document.document_number)


@transaction.atomic
def cancel_document(*, user: User, document_id: UUID) -> Document:
    """
    Mark a document CANCELLED.

    Raises:
        InvalidStatusTransitionError: If it is converted or already cancelled
    """
    try:
        document = Document.objects.select_for_update().get(id=document_id, user=user)
    except Document.DoesNotExist:
        raise DocumentNotFoundError("Document not found")

    if document.status == DocumentStatus.CONVERTED:
        raise InvalidStatusTransitionError("Converted proformas cannot be cancelled")
    if document.status == DocumentStatus.CANCELLED:
        raise InvalidStatusTransitionError("Document is already cancelled")

    document.status = DocumentStatus.CANCELLED
    document.save(update_fields=['status', 'updated_at'])
    return document


@transaction.atomic
def restore_document(*, user: User, document_id: UUID) -> Document:
    """Bring a cancelled document back as DRAFT (PAID if its payments cover it)."""
    try:
        document = Document.objects.select_for_update().get(id=document_id, user=user)
    except Document.DoesNotExist:
        raise DocumentNotFoundError("Document not found")

    if document.status != DocumentStatus.CANCELLED:
        raise InvalidStatusTransitionError("Only cancelled documents can be restored")

    document.status = DocumentStatus.DRAFT
    document.save(update_fields=['status', 'updated_at'])
    return refresh_payment_totals(document)


@transaction.atomic
def batch_create_documents(*, user: User, documents: List[Dict[str, Any]]) -> List[Document]:
    """Create all given documents or none of them."""
    created = [create_document(user=user, **data) for data in documents]
    logger.info("User %s imported %d document(s)", user.pk, len(created))
    return created
