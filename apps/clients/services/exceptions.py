"""Domain-specific exceptions for clients services."""


class ClientServiceError(Exception):
    """Base exception for clients services."""
    pass


class ClientNotFoundError(ClientServiceError):
    """Raised when a client does not exist or belongs to another user."""
    pass


class ClientValidationError(ClientServiceError):
    """Raised when client data is invalid."""
    pass
