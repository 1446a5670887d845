"""Error taxonomy for Productboard API access.

Every failure raised below the dispatch boundary is a ProductboardApiError so
the MCP layer can render it without knowing where it came from.
"""
from typing import Any, Optional, Union


class ProductboardApiError(Exception):
    """Raised when a Productboard operation fails."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        details: Any = None,
        retry_after: Optional[Union[int, float]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details
        self.retry_after = retry_after


class ConfigurationError(ProductboardApiError):
    """Raised when the connector is missing required configuration."""

    def __init__(self, message: str):
        super().__init__(message, status=401)


class ValidationError(ProductboardApiError):
    """Raised when tool arguments are missing, malformed or contradictory."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status=400, details=details)


class TransportError(ProductboardApiError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, details=details)
