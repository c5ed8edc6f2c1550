"""Domain-specific exceptions for documents services."""


class DocumentServiceError(Exception):
    """Base exception for documents services."""
    pass


class DocumentNotFoundError(DocumentServiceError):
    """Raised when a document does not exist or belongs to another user."""
    pass


class DocumentValidationError(DocumentServiceError):
    """Raised when document data is invalid."""
    pass


class DuplicateDocumentNumberError(DocumentServiceError):
    """Raised when the user already has a document of this type with the number."""
    pass


class DocumentLockedError(DocumentServiceError):
    """Raised when modifying a document that can no longer change."""
    pass


class InvalidConversionError(DocumentServiceError):
    """Raised when a document cannot be converted to an invoice."""
    pass


class InvalidStatusTransitionError(DocumentServiceError):
    """Raised when cancelling or restoring is not allowed."""
    pass
