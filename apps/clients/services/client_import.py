"""Bulk client import."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from typing import List, Dict, Any

from ..models import Client
from .client_management import create_client

logger = logging.getLogger(__name__)

User = get_user_model()


@transaction.atomic
def batch_create_clients(*, user: User, clients: List[Dict[str, Any]]) -> List[Client]:
    """
    Create all given clients or none of them.

    Each entry takes the same fields as create_client(); any failure rolls
    back the whole batch.
    """
    created = [create_client(user=user, **data) for data in clients]
    logger.info("User %s imported %d client(s)", user.pk, len(created))
    return created
