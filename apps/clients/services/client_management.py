"""Client CRUD operations service."""

import logging

from django.db import transaction
from django.db.models import Q
from django.contrib.auth import get_user_model
from uuid import UUID
from typing import Optional, Dict, Any

from apps.core.services import next_counter_value, ensure_counter_at_least
from ..models import Client
from .exceptions import ClientNotFoundError, ClientValidationError

logger = logging.getLogger(__name__)

User = get_user_model()

CLIENT_COUNTER_KEY = 'client'

EDITABLE_FIELDS = ['name', 'email', 'phone', 'location', 'vat_number', 'client_number']


def search_clients(*, user: User, search: Optional[str] = None):
    """Return the user's clients, newest first, optionally filtered by a search term."""
    queryset = Client.objects.filter(user=user)

    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) |
            Q(email__icontains=search) |
            Q(phone__icontains=search) |
            Q(location__icontains=search)
        )

    return queryset.order_by('-created_at')


def get_client(*, user: User, client_id: UUID) -> Client:
    """
    Raises:
        ClientNotFoundError: If the client is missing or owned by someone else
    """
    try:
        return Client.objects.get(id=client_id, user=user)
    except Client.DoesNotExist:
        raise ClientNotFoundError("Client not found")


def next_client_number(*, user: User) -> int:
    """Reserve and return the next client number for the user."""
    return next_counter_value(user=user, key=CLIENT_COUNTER_KEY)


@transaction.atomic
def create_client(
    *,
    user: User,
    name: str,
    email: str = '',
    phone: str = '',
    location: str = '',
    vat_number: str = '',
    client_number: Optional[int] = None
) -> Client:
    """
    Create a client for the user.

    A client number is reserved from the user's counter when none is given;
    an explicit number moves the counter forward so it is not handed out
    again.

    Raises:
        ClientValidationError: If name is blank
    """
    name = (name or '').strip()
    if not name:
        raise ClientValidationError("Name is required")

    if client_number is None:
        client_number = next_client_number(user=user)
    else:
        ensure_counter_at_least(user=user, key=CLIENT_COUNTER_KEY, value=client_number)

    return Client.objects.create(
        user=user,
        name=name,
        email=email or '',
        phone=phone or '',
        location=location or '',
        vat_number=vat_number or '',
        client_number=client_number,
    )


@transaction.atomic
def update_client(*, user: User, client_id: UUID, data: Dict[str, Any]) -> Client:
    """
    Update an existing client.

    Raises:
        ClientNotFoundError: If client doesn't exist
        ClientValidationError: If name would become blank
    """
    try:
        client = Client.objects.select_for_update().get(id=client_id, user=user)
    except Client.DoesNotExist:
        raise ClientNotFoundError("Client not found")

    for field, value in data.items():
        if field not in EDITABLE_FIELDS:
            continue
        if field == 'name':
            value = (value or '').strip()
            if not value:
                raise ClientValidationError("Name is required")
        elif field != 'client_number':
            value = value or ''
        setattr(client, field, value)

    client.save()
    return client


@transaction.atomic
def delete_client(*, user: User, client_id: UUID) -> None:
    """
    Delete a client. Documents and payments keep their client_name snapshot.

    Raises:
        ClientNotFoundError: If client doesn't exist
    """
    deleted, _ = Client.objects.filter(id=client_id, user=user).delete()
    if not deleted:
        raise ClientNotFoundError("Client not found")
    logger.info("User %s deleted client %s", user.pk, client_id)
