"""Stock item search and filtering."""

from django.db.models import Q, F
from django.contrib.auth import get_user_model
from uuid import UUID
from typing import Optional, List

from ..models import StockItem

User = get_user_model()

SEARCH_FIELDS = [
    'name', 'description', 'category', 'brand', 'model', 'part_number',
    'sku', 'specifications', 'supplier_name', 'notes',
]


def search_stock(
    *,
    user: User,
    search: Optional[str] = None,
    category: Optional[str] = None,
    supplier: Optional[UUID] = None,
    low_stock: bool = False
):
    """
    Filter the user's stock items, newest first.

    Args:
        search: Case-insensitive match across the descriptive fields
        category: Exact category (case-insensitive)
        supplier: Supplier id
        low_stock: Only items at or under their minimum quantity
    """
    queryset = StockItem.objects.filter(user=user).select_related('supplier')

    if search:
        condition = Q()
        for field in SEARCH_FIELDS:
            condition |= Q(**{f'{field}__icontains': search})
        queryset = queryset.filter(condition)

    if category:
        queryset = queryset.filter(category__iexact=category)

    if supplier:
        queryset = queryset.filter(supplier_id=supplier)

    if low_stock:
        queryset = queryset.filter(min_quantity__gt=0, quantity__lte=F('min_quantity'))

    return queryset.order_by('-created_at')


def get_categories(*, user: User) -> List[str]:
    """Distinct non-empty categories, alphabetically."""
    return list(
        StockItem.objects
        .filter(user=user)
        .exclude(category='')
        .values_list('category', flat=True)
        .distinct()
        .order_by('category')
    )
