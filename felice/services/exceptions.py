"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class NetworkError(ServiceError):
    """Raised when a search request fails, is rejected, or returns an error status."""
