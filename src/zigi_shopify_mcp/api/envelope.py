"""Root-key envelope handling for Shopify request and response bodies.

Shopify nests a resource under its name in both directions: ``/shop.json``
answers ``{"shop": {...}}`` and creating a product expects
``{"product": {...}}``. Callers work with the inner object only.
"""

import json
from typing import Any, Optional

from ..constants import BODY_METHODS
from ..exceptions import DecodeError
from .transport import Response


def wrap(body: Any, root_key: Optional[str], http_method: str) -> Any:
    """Nest a request body under the root key, for POST and PUT only."""
    if root_key is None or http_method.upper() not in BODY_METHODS:
        return body
    return {root_key: body}


def unwrap(payload: Any, root_key: Optional[str], operation: Optional[str] = None) -> Any:
    """Return the value stored under the root key, or the whole payload when there is none.

    Raises:
        DecodeError: If a root key is declared but the payload does not contain it
    """
    if root_key is None:
        return payload

    if not isinstance(payload, dict) or root_key not in payload:
        raise DecodeError(f'Response is missing the expected root key "{root_key}"', operation=operation)

    return payload[root_key]


def decode_body(response: Response, operation: Optional[str] = None) -> Any:
    """Parse a response body as JSON. An empty body decodes to an empty dict.

    Raises:
        DecodeError: If the body is not valid JSON
    """
    if not response.body or not response.body.strip():
        return {}

    try:
        return json.loads(response.body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(f"Response body is not valid JSON: {e}", operation=operation) from e
