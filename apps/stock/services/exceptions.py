"""Domain-specific exceptions for stock services."""


class StockServiceError(Exception):
    """Base exception for stock services."""
    pass


class StockItemNotFoundError(StockServiceError):
    pass


class StockValidationError(StockServiceError):
    """Raised when stock data is invalid (blank name, foreign supplier)."""
    pass
