"""Supplier CRUD operations."""

import logging

from django.db import transaction
from django.db.models import Q
from django.contrib.auth import get_user_model
from uuid import UUID
from typing import Optional, Dict, Any

from .exceptions import SupplierNotFoundError, SupplierValidationError
from .models import Supplier

logger = logging.getLogger(__name__)

User = get_user_model()

EDITABLE_FIELDS = ['name', 'contact_name', 'email', 'phone', 'address', 'website', 'notes']


def search_suppliers(*, user: User, search: Optional[str] = None):
    """Return the user's suppliers ordered by name."""
    queryset = Supplier.objects.filter(user=user)

    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) |
            Q(contact_name__icontains=search) |
            Q(email__icontains=search)
        )

    return queryset.order_by('name')


def get_supplier(*, user: User, supplier_id: UUID) -> Supplier:
    try:
        return Supplier.objects.get(id=supplier_id, user=user)
    except Supplier.DoesNotExist:
        raise SupplierNotFoundError("Supplier not found")


@transaction.atomic
def create_supplier(*, user: User, name: str, **fields) -> Supplier:
    """
    Raises:
        SupplierValidationError: If name is blank
    """
    name = (name or '').strip()
    if not name:
        raise SupplierValidationError("Name is required")

    data = {field: fields.get(field) or '' for field in EDITABLE_FIELDS if field != 'name'}
    return Supplier.objects.create(user=user, name=name, **data)


@transaction.atomic
def update_supplier(*, user: User, supplier_id: UUID, data: Dict[str, Any]) -> Supplier:
    try:
        supplier = Supplier.objects.select_for_update().get(id=supplier_id, user=user)
    except Supplier.DoesNotExist:
        raise SupplierNotFoundError("Supplier not found")

    for field, value in data.items():
        if field not in EDITABLE_FIELDS:
            continue
        value = (value or '').strip() if field == 'name' else (value or '')
        if field == 'name' and not value:
            raise SupplierValidationError("Name is required")
        setattr(supplier, field, value)

    supplier.save()
    return supplier


@transaction.atomic
def delete_supplier(*, user: User, supplier_id: UUID) -> None:
    """
    Delete a supplier.

    Stock items lose the link but keep the supplier's name in
    supplier_name, so they still show where they came from.
    """
    try:
        supplier = Supplier.objects.select_for_update().get(id=supplier_id, user=user)
    except Supplier.DoesNotExist:
        raise SupplierNotFoundError("Supplier not found")

    supplier.stock_items.filter(supplier_name='').update(supplier_name=supplier.name)
    supplier.delete()
    logger.info("User %s deleted supplier %s", user.pk, supplier_id)
