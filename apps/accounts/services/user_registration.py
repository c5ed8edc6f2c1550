"""User registration service."""

from django.db import transaction
from django.contrib.auth import get_user_model

from .exceptions import DuplicateEmailError, UserRegistrationError
from .password_management import validate_password_length

User = get_user_model()


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    name: str = ""
) -> User:
    """
    Register a new user.

    Args:
        email: User's email address (stored trimmed and lower-cased)
        password: User's password (will be hashed)
        name: Optional display name

    Returns:
        Created User instance

    Raises:
        DuplicateEmailError: If the email is already registered
        WeakPasswordError: If the password is too short
        UserRegistrationError: If registration fails for another reason
    """
    normalized_email = User.objects.normalize_email(email)
    if not normalized_email:
        raise UserRegistrationError("Email is required")

    validate_password_length(password)

    if User.objects.filter(email__iexact=normalized_email).exists():
        raise DuplicateEmailError(
            "An account with this email already exists. "
            "Please use a different email or try signing in."
        )

    return User.objects.create_user(
        email=normalized_email,
        password=password,
        name=name or ''
    )
