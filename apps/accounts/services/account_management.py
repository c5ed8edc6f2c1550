"""Account deletion service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from uuid import UUID

from .exceptions import ProtectedAccountError, UserNotFoundError

logger = logging.getLogger(__name__)

User = get_user_model()


@transaction.atomic
def delete_user_account(*, user_id: UUID) -> str:
    """
    Delete a user together with all of their data.

    Clients, stock, documents, payments, expenses and settings are removed
    by the CASCADE foreign keys.

    Args:
        user_id: User's ID

    Returns:
        Email of the deleted user

    Raises:
        UserNotFoundError: If the user does not exist
        ProtectedAccountError: If the user is a dashboard admin
    """
    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    if user.is_dashboard_admin:
        raise ProtectedAccountError("Cannot delete admin account")

    email = user.email
    user.delete()
    logger.info("Deleted user %s and all associated data", email)
    return email
