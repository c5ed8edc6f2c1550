"""Services for stock business logic."""

from .exceptions import (
    StockServiceError,
    StockItemNotFoundError,
    StockValidationError,
)
from .stock_management import (
    get_stock_item,
    create_stock_item,
    update_stock_item,
    delete_stock_item,
    batch_create_stock_items,
)
from .stock_search import (
    search_stock,
    get_categories,
)

__all__ = [
    # Exceptions
    'StockServiceError',
    'StockItemNotFoundError',
    'StockValidationError',
    # Services
    'get_stock_item',
    'create_stock_item',
    'update_stock_item',
    'delete_stock_item',
    'batch_create_stock_items',
    'search_stock',
    'get_categories',
]
