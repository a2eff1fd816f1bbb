"""Utility modules for Shopify operations."""

from .decorators import format_error_response, format_success_response, handle_shopify_errors
from .validators import (
    find_missing_arguments,
    parse_bool_option,
    strip_shop_suffix,
    validate_credential,
    validate_shop_domain,
    validate_since_id,
)

__all__ = [
    "find_missing_arguments",
    "format_error_response",
    "format_success_response",
    "handle_shopify_errors",
    "parse_bool_option",
    "strip_shop_suffix",
    "validate_credential",
    "validate_shop_domain",
    "validate_since_id",
]
