"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    pass


class DuplicateEmailError(UserRegistrationError):
    """Raised when an account already uses the email (case-insensitive)."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class WeakPasswordError(AccountsServiceError):
    """Raised when a password is shorter than the minimum length."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    pass


class PasswordConfirmationError(AccountsServiceError):
    """Raised when the current password does not match."""
    pass


class ProtectedAccountError(AccountsServiceError):
    """Raised when trying to delete an admin account."""
    pass
