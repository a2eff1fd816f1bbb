"""Shopify REST Admin API client and MCP server."""

from .catalog import OperationCatalog, OperationDescriptor
from .client import ShopifyClient, create_client
from .config import ConnectionConfig, PrivateAppAuth, PublicAppAuth
from .exceptions import (
    ApiError,
    ConfigError,
    DecodeError,
    InvalidArgumentsError,
    RateLimitError,
    ShopifyError,
    TransportError,
    UnknownOperationError,
)

__all__ = [
    "ApiError",
    "ConfigError",
    "ConnectionConfig",
    "DecodeError",
    "InvalidArgumentsError",
    "OperationCatalog",
    "OperationDescriptor",
    "PrivateAppAuth",
    "PublicAppAuth",
    "RateLimitError",
    "ShopifyClient",
    "ShopifyError",
    "TransportError",
    "UnknownOperationError",
    "create_client",
]
