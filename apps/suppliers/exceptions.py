"""Domain-specific exceptions for suppliers."""


class SupplierServiceError(Exception):
    """Base exception for suppliers services."""
    pass


class SupplierNotFoundError(SupplierServiceError):
    pass


class SupplierValidationError(SupplierServiceError):
    pass
