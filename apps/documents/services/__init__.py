"""Services for documents business logic."""

from .exceptions import (
    DocumentServiceError,
    DocumentNotFoundError,
    DocumentValidationError,
    DuplicateDocumentNumberError,
    DocumentLockedError,
    InvalidConversionError,
    InvalidStatusTransitionError,
)
from .calculations import (
    quantize_money,
    line_total,
    mandays_cost,
    resolve_tax_rate,
    calculate_totals,
)
from .numbering import (
    format_document_number,
    next_document_number,
)
from .payment_tracking import (
    is_fully_paid,
    is_overdue,
    get_payment_status,
    refresh_payment_totals,
)
from .document_management import (
    search_documents,
    get_document,
    create_document,
    update_document,
    delete_document,
    cancel_document,
    restore_document,
    batch_create_documents,
)
from .conversion import convert_proforma_to_invoice
from .summary import get_documents_summary

__all__ = [
    # Exceptions
    'DocumentServiceError',
    'DocumentNotFoundError',
    'DocumentValidationError',
    'DuplicateDocumentNumberError',
    'DocumentLockedError',
    'InvalidConversionError',
    'InvalidStatusTransitionError',
    # Calculations
    'quantize_money',
    'line_total',
    'mandays_cost',
    'resolve_tax_rate',
    'calculate_totals',
    # Numbering
    'format_document_number',
    'next_document_number',
    # Payment tracking
    'is_fully_paid',
    'is_overdue',
    'get_payment_status',
    'refresh_payment_totals',
    # Management
    'search_documents',
    'get_document',
    'create_document',
    'update_document',
    'delete_document',
    'cancel_document',
    'restore_document',
    'batch_create_documents',
    'convert_proforma_to_invoice',
    'get_documents_summary',
]
