"""Exceptions rendered by the API as ``{"error": message}`` bodies."""


class DashboardError(Exception):
    """Base exception for the dashboard API."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingMonthError(DashboardError):
    """A month parameter was required but not supplied."""

    status_code = 400

    def __init__(self, message: str = "Month is required."):
        super().__init__(message)


class InvalidMonthError(DashboardError):
    """A month parameter could not be mapped to a calendar month."""

    status_code = 400

    def __init__(self, message: str = "Invalid month provided."):
        super().__init__(message)


class SeedError(DashboardError):
    """Fetching or storing the seed feed failed."""
    pass


class StorageError(DashboardError):
    """A database query failed."""
    pass
