"""Domain-specific exceptions for expenses."""


class ExpenseServiceError(Exception):
    """Base exception for expenses services."""
    pass


class ExpenseNotFoundError(ExpenseServiceError):
    pass


class ExpenseValidationError(ExpenseServiceError):
    pass
