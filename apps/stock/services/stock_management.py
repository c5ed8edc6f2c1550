"""Stock item CRUD operations service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from uuid import UUID
from typing import Optional, Dict, Any, List

from apps.suppliers.models import Supplier
from ..models import StockItem
from .exceptions import StockItemNotFoundError, StockValidationError

logger = logging.getLogger(__name__)

User = get_user_model()

TEXT_FIELDS = [
    'description', 'category', 'unit', 'brand', 'model', 'part_number', 'sku',
    'specifications', 'voltage', 'power', 'material', 'size', 'weight', 'color',
    'supplier_name', 'supplier_code', 'warranty', 'notes',
]
NUMBER_FIELDS = ['buying_price', 'selling_price', 'quantity', 'min_quantity']


def get_stock_item(*, user: User, item_id: UUID) -> StockItem:
    try:
        return StockItem.objects.select_related('supplier').get(id=item_id, user=user)
    except StockItem.DoesNotExist:
        raise StockItemNotFoundError("Stock item not found")


def _resolve_supplier(*, user: User, supplier_id: Optional[UUID]) -> Optional[Supplier]:
    if supplier_id is None:
        return None
    try:
        return Supplier.objects.get(id=supplier_id, user=user)
    except Supplier.DoesNotExist:
        raise StockValidationError("Supplier not found")


def _apply_fields(item: StockItem, data: Dict[str, Any]) -> None:
    for field in TEXT_FIELDS:
        if field in data:
            setattr(item, field, data[field] or '')
    for field in NUMBER_FIELDS:
        if field in data and data[field] is not None:
            setattr(item, field, data[field])


@transaction.atomic
def create_stock_item(*, user: User, name: str, supplier_id: Optional[UUID] = None, **data) -> StockItem:
    """
    Create a stock item.

    When a supplier is linked and no supplier_name was given, the
    supplier's name is copied into supplier_name.

    Raises:
        StockValidationError: If name is blank or the supplier is not the user's
    """
    name = (name or '').strip()
    if not name:
        raise StockValidationError("Name is required")

    supplier = _resolve_supplier(user=user, supplier_id=supplier_id)

    item = StockItem(user=user, name=name, supplier=supplier)
    _apply_fields(item, data)
    if supplier and not item.supplier_name:
        item.supplier_name = supplier.name
    item.save()
    return item


@transaction.atomic
def update_stock_item(*, user: User, item_id: UUID, data: Dict[str, Any]) -> StockItem:
    """
    Update only the fields present in `data`.

    Raises:
        StockItemNotFoundError: If the item doesn't exist
        StockValidationError: If name becomes blank or the supplier is not the user's
    """
    try:
        item = StockItem.objects.select_for_update().get(id=item_id, user=user)
    except StockItem.DoesNotExist:
        raise StockItemNotFoundError("Stock item not found")

    if 'name' in data:
        name = (data['name'] or '').strip()
        if not name:
            raise StockValidationError("Name is required")
        item.name = name

    if 'supplier_id' in data:
        item.supplier = _resolve_supplier(user=user, supplier_id=data['supplier_id'])

    _apply_fields(item, data)
    if item.supplier and not item.supplier_name:
        item.supplier_name = item.supplier.name
    item.save()
    return item


@transaction.atomic
def delete_stock_item(*, user: User, item_id: UUID) -> None:
    """Delete a stock item; document lines keep their copied name and price."""
    deleted, _ = StockItem.objects.filter(id=item_id, user=user).delete()
    if not deleted:
        raise StockItemNotFoundError("Stock item not found")
    logger.info("User %s deleted stock item %s", user.pk, item_id)


@transaction.atomic
def batch_create_stock_items(*, user: User, items: List[Dict[str, Any]]) -> List[StockItem]:
    """Create all given stock items or none of them."""
    created = [create_stock_item(user=user, **data) for data in items]
    logger.info("User %s imported %d stock item(s)", user.pk, len(created))
    return created
