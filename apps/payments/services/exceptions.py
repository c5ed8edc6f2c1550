"""Domain-specific exceptions for payments services."""


class PaymentServiceError(Exception):
    """Base exception for payments services."""
    pass


class PaymentNotFoundError(PaymentServiceError):
    pass


class PaymentValidationError(PaymentServiceError):
    """Raised when a payment references data it may not use."""
    pass


class InvoiceNotFoundError(PaymentServiceError):
    pass


class PaymentNotAllowedError(PaymentServiceError):
    """Raised when the target document cannot take payments."""
    pass


class InsufficientBalanceError(PaymentServiceError):
    """Raised when the client's credit does not cover the requested amount."""
    pass
