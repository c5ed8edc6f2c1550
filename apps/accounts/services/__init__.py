"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    DuplicateEmailError,
    InvalidCredentialsError,
    InactiveAccountError,
    WeakPasswordError,
    UserNotFoundError,
    PasswordConfirmationError,
    ProtectedAccountError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .password_management import (
    validate_password_length,
    change_password,
    set_user_password,
    MIN_PASSWORD_LENGTH,
)
from .account_management import delete_user_account

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'DuplicateEmailError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'WeakPasswordError',
    'UserNotFoundError',
    'PasswordConfirmationError',
    'ProtectedAccountError',
    # Services
    'register_user',
    'authenticate_user',
    'validate_password_length',
    'change_password',
    'set_user_password',
    'MIN_PASSWORD_LENGTH',
    'delete_user_account',
]
