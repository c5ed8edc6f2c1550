"""Password change services."""

from django.db import transaction
from django.contrib.auth import get_user_model
from uuid import UUID

from .exceptions import PasswordConfirmationError, UserNotFoundError, WeakPasswordError

User = get_user_model()

MIN_PASSWORD_LENGTH = 6


def validate_password_length(password: str) -> None:
    """Raise WeakPasswordError for passwords under the minimum length."""
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise WeakPasswordError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )


@transaction.atomic
def change_password(*, user_id: UUID, current_password: str, new_password: str) -> User:
    """
    Change a user's own password after checking the current one.

    Raises:
        UserNotFoundError: If the user does not exist
        PasswordConfirmationError: If current_password is wrong
        WeakPasswordError: If new_password is too short
    """
    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    if not user.check_password(current_password):
        raise PasswordConfirmationError("Current password is incorrect")

    validate_password_length(new_password)

    user.set_password(new_password)
    user.save(update_fields=['password', 'updated_at'])
    return user


@transaction.atomic
def set_user_password(*, user_id: UUID, new_password: str) -> User:
    """
    Overwrite a user's password without the current one (admin reset).

    Raises:
        UserNotFoundError: If the user does not exist
        WeakPasswordError: If new_password is too short
    """
    validate_password_length(new_password)

    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    user.set_password(new_password)
    user.save(update_fields=['password', 'updated_at'])
    return user
