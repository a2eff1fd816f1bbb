"""Common exceptions for the zigi-shopify-mcp package."""

from typing import Any, Optional


class ShopifyError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(ShopifyError, ValueError):
    """Raised when connection options are missing or malformed."""


class UnknownOperationError(ShopifyError, LookupError):
    """Raised when an operation name is not in the catalog."""

    def __init__(self, operation: str) -> None:
        super().__init__(f'Operation "{operation}" is not defined in the Shopify operation catalog')
        self.operation = operation


class InvalidArgumentsError(ShopifyError, ValueError):
    """Raised when operation arguments do not satisfy the parameter schema."""

    def __init__(self, operation: str, missing: list[str]) -> None:
        super().__init__(f'Operation "{operation}" is missing required arguments: {", ".join(missing)}')
        self.operation = operation
        self.missing = missing


class TransportError(ShopifyError):
    """Raised when no response could be obtained from the Shopify API."""


class DecodeError(ShopifyError, ValueError):
    """Raised when a response body is not JSON or lacks its declared root key."""

    def __init__(self, message: str, operation: Optional[str] = None) -> None:
        super().__init__(message)
        self.operation = operation


class ApiError(ShopifyError):
    """Raised when Shopify answers with a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        operation: Optional[str] = None,
        errors: Any = None,
        response: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.operation = operation
        self.errors = errors
        self.response = response


class RateLimitError(ApiError):
    """Raised when Shopify keeps answering 429 after all retries."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        errors: Any = None,
        response: Any = None,
        retry_after: Optional[float] = None,
    ) -> None:
        super().__init__(message, 429, operation=operation, errors=errors, response=response)
        self.retry_after = retry_after
