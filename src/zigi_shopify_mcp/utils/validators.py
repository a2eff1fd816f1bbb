"""Input validation utilities for Shopify connection options and operation arguments."""

import re
from typing import Any, Mapping, Optional

from ..constants import FALSY_VALUES, SHOP_DOMAIN_SUFFIX, TRUTHY_VALUES

SHOP_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9-]*$")


def validate_shop_domain(shop: str) -> bool:
    """Validate a shop handle, with or without the myshopify.com suffix.

    Args:
        shop: Shop handle ("acme") or domain ("acme.myshopify.com")

    Returns:
        True if the shop domain is well-formed
    """
    if not isinstance(shop, str):
        return False

    return SHOP_NAME_PATTERN.match(strip_shop_suffix(shop)) is not None


def strip_shop_suffix(shop: str) -> str:
    """Return the shop handle without a trailing .myshopify.com."""
    shop = shop.strip().lower()
    if shop.endswith(SHOP_DOMAIN_SUFFIX):
        shop = shop[: -len(SHOP_DOMAIN_SUFFIX)]
    return shop


def validate_credential(value: Any) -> bool:
    """Validate that a credential is a non-blank string.

    Args:
        value: The api key, password or access token to validate

    Returns:
        True if the credential is usable
    """
    return isinstance(value, str) and len(value.strip()) > 0


def parse_bool_option(value: Any) -> Optional[bool]:
    """Interpret a boolean option coming from code or the environment.

    Args:
        value: A bool, or a string such as "true", "0", "yes"

    Returns:
        The boolean value, or None if it cannot be interpreted
    """
    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUTHY_VALUES:
            return True
        if normalized in FALSY_VALUES:
            return False

    return None


def validate_since_id(since_id: Any) -> bool:
    """Validate a since_id cursor value.

    Args:
        since_id: The cursor to validate

    Returns:
        True if the cursor is a non-negative integer
    """
    return isinstance(since_id, int) and not isinstance(since_id, bool) and since_id >= 0


def find_missing_arguments(arguments: Mapping[str, Any], required: list[str]) -> list[str]:
    """Return the required argument names that are absent or None.

    Args:
        arguments: Caller supplied arguments
        required: Names that must be present

    Returns:
        List of missing names, in the order given
    """
    return [name for name in required if arguments.get(name) is None]
