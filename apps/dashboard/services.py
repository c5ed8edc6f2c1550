"""
Bulk cleanup across tenants.

Stock items and clients are only deleted when no document refers to them.
After each delete the owners' cached responses are invalidated, since the
rows disappear from under their own endpoints.
"""

import logging

from django.db import transaction
from typing import List
from uuid import UUID

from apps.clients.models import Client
from apps.core.cache import invalidate_user_cache
from apps.documents.models import Document, DocumentItem, DocumentStatus
from apps.stock.models import StockItem
from .exceptions import NothingToDeleteError

logger = logging.getLogger(__name__)


def _invalidate_owners(user_ids, *resources):
    for user_id in set(user_ids):
        invalidate_user_cache(user_id, *resources)


@transaction.atomic
def delete_unused_stock(*, ids: List[UUID]) -> dict:
    """
    Delete the given stock items that no document line uses.

    Returns:
        dict with `deleted` and `skipped` counts

    Raises:
        NothingToDeleteError: If every selected item is in use
    """
    used = set(
        DocumentItem.objects
        .filter(stock_item_id__in=ids)
        .values_list('stock_item_id', flat=True)
    )
    safe_ids = [item_id for item_id in ids if item_id not in used]
    if not safe_ids:
        raise NothingToDeleteError("None of the selected items can be deleted (they are in use)")

    queryset = StockItem.objects.filter(id__in=safe_ids)
    owners = list(queryset.values_list('user_id', flat=True))
    deleted, _ = queryset.delete()

    _invalidate_owners(owners, 'stock')
    logger.info("Admin cleanup deleted %s unused stock items", deleted)
    return {'deleted': deleted, 'skipped': len(ids) - len(safe_ids)}


@transaction.atomic
def delete_unused_clients(*, ids: List[UUID]) -> dict:
    """
    Delete the given clients that no document refers to. Their unallocated
    payments stay, unlinked, like any payment whose client was removed.
    """
    used = set(
        Document.objects
        .filter(client_id__in=ids)
        .values_list('client_id', flat=True)
    )
    safe_ids = [client_id for client_id in ids if client_id not in used]
    if not safe_ids:
        raise NothingToDeleteError("None of the selected clients can be deleted (they are in use)")

    queryset = Client.objects.filter(id__in=safe_ids)
    owners = list(queryset.values_list('user_id', flat=True))
    deleted = 0
    for client in queryset:
        client.delete()
        deleted += 1

    _invalidate_owners(owners, 'clients', 'payments')
    logger.info("Admin cleanup deleted %s unused clients", deleted)
    return {'deleted': deleted, 'skipped': len(ids) - len(safe_ids)}


@transaction.atomic
def delete_documents(*, ids: List[UUID]) -> dict:
    """
    Delete documents of any user. Items and payments go with them; a
    proforma whose invoice is deleted returns to DRAFT.
    """
    queryset = Document.objects.filter(id__in=ids)
    owners = list(queryset.values_list('user_id', flat=True))

    (
        Document.objects
        .filter(conversions__in=queryset, status=DocumentStatus.CONVERTED)
        .exclude(id__in=ids)
        .update(status=DocumentStatus.DRAFT, converted_at=None)
    )

    deleted = 0
    for document in queryset:
        document.delete()
        deleted += 1

    _invalidate_owners(owners, 'documents', 'payments', 'clients')
    logger.info("Admin cleanup deleted %s documents", deleted)
    return {'deleted': deleted}
