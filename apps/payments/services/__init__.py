"""Services for payments business logic."""

from .exceptions import (
    PaymentServiceError,
    PaymentNotFoundError,
    PaymentValidationError,
    InvoiceNotFoundError,
    PaymentNotAllowedError,
    InsufficientBalanceError,
)
from .payment_management import (
    search_payments,
    get_payment,
    create_payment,
    update_payment,
    delete_payment,
)
from .payment_recording import record_invoice_payment
from .receipt import get_payment_receipt

__all__ = [
    # Exceptions
    'PaymentServiceError',
    'PaymentNotFoundError',
    'PaymentValidationError',
    'InvoiceNotFoundError',
    'PaymentNotAllowedError',
    'InsufficientBalanceError',
    # Services
    'search_payments',
    'get_payment',
    'create_payment',
    'update_payment',
    'delete_payment',
    'record_invoice_payment',
    'get_payment_receipt',
]
