"""Services for clients business logic."""

from .exceptions import (
    ClientServiceError,
    ClientNotFoundError,
    ClientValidationError,
)
from .client_management import (
    search_clients,
    get_client,
    next_client_number,
    create_client,
    update_client,
    delete_client,
    CLIENT_COUNTER_KEY,
)
from .client_import import batch_create_clients
from .client_balance import (
    get_unallocated_payments,
    get_client_balance,
)

__all__ = [
    # Exceptions
    'ClientServiceError',
    'ClientNotFoundError',
    'ClientValidationError',
    # Services
    'search_clients',
    'get_client',
    'next_client_number',
    'create_client',
    'update_client',
    'delete_client',
    'CLIENT_COUNTER_KEY',
    'batch_create_clients',
    'get_unallocated_payments',
    'get_client_balance',
]
