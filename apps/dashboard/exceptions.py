"""Domain-specific exceptions for the admin dashboard."""


class DashboardServiceError(Exception):
    """Base exception for dashboard services."""
    pass


class NothingToDeleteError(DashboardServiceError):
    """Every selected row is still referenced."""
    pass
