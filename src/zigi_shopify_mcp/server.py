#!/usr/bin/env python3
"""MCP Server for the Shopify REST Admin API using FastMCP.

This server exposes the operation catalog as tools: any operation can be
called by name, and list operations can be drained through the since_id
iterator.
"""

import itertools
import json
import secrets
import uuid
from typing import Annotated, Any, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP

from .catalog import OperationCatalog
from .client import ShopifyClient, create_client
from .config import ConnectionConfig
from .constants import DEFAULT_MAX_ITEMS
from .utils.decorators import format_error_response, format_success_response, handle_shopify_errors

# Load environment variables from .env file
load_dotenv()

mcp: FastMCP = FastMCP(
    "zigi-shopify-mcp",
    instructions="Call Shopify REST Admin API operations by name and iterate over resource collections.",
)

# Auth token storage - stores valid authentication tokens
auth_tokens: set[str] = set()

catalog = OperationCatalog.load()

_client: Optional[ShopifyClient] = None


def validate_auth_token(token: str) -> bool:
    """Validate if the provided auth token is valid."""
    return token in auth_tokens


def get_shopify_client() -> ShopifyClient:
    """Return the shared client, building it from SHOPIFY_* environment variables on first use."""
    global _client
    if _client is None:
        _client = create_client(ConnectionConfig.from_env(), catalog=catalog)
    return _client


def auth_failed_response() -> str:
    return format_error_response(
        "auth_failed",
        "Invalid or missing auth token. Please call get_auth_token() first to obtain a valid token.",
        str(uuid.uuid4()),
    )


def parse_arguments(arguments: str) -> dict[str, Any]:
    """Decode the JSON object passed as operation arguments."""
    parsed = json.loads(arguments) if arguments.strip() else {}
    if not isinstance(parsed, dict):
        raise ValueError("arguments must be a JSON object")
    return parsed


def get_auth_token() -> str:
    """Generate and return a new authentication token (session ID) that must be used for all other function calls.

    This is the FIRST function you must call before using any other functions in this MCP server.

    Returns:
        str: A secure, randomly generated authentication token to be used for all other function calls
    """
    token = secrets.token_hex(32)
    auth_tokens.add(token)
    return f"Authentication successful. Your auth token is: {token}"


def list_operations(
    auth_token: Annotated[
        str,
        "Authentication token obtained from get_auth_token(). Required for this function to work.",
    ],
    search: Annotated[str, "Case-insensitive text to match against operation names (e.g., 'product')"] = "",
) -> str:
    """List the Shopify operations that can be called with call_operation.

    REQUIRES AUTHENTICATION: You must provide a valid auth_token obtained from get_auth_token().
    """
    if not validate_auth_token(auth_token):
        return auth_failed_response()

    operations = [
        {
            "name": descriptor.name,
            "http_method": descriptor.http_method,
            "path": descriptor.path_template,
            "root_key": descriptor.root_key,
            "required_parameters": descriptor.required_parameters,
        }
        for name, descriptor in sorted(catalog.items())
        if search.lower() in name.lower()
    ]
    return format_success_response(operations, metadata={"operations_count": len(operations)})


@handle_shopify_errors
def call_operation(
    auth_token: Annotated[
        str,
        "Authentication token obtained from get_auth_token(). Required for this function to work.",
    ],
    operation: Annotated[str, "Operation name, e.g. 'getShop', 'getProduct', 'createProduct'"],
    arguments: Annotated[
        str, "JSON object of operation arguments (e.g., '{\"id\": 632910392}' or '{\"title\": \"Hat\"}')"
    ] = "{}",
) -> str:
    """Call a single Shopify REST Admin API operation.

    REQUIRES AUTHENTICATION: You must provide a valid auth_token obtained from get_auth_token().

    Path placeholders (such as id or product_id) are taken from the arguments; the
    remaining arguments become query parameters for reads and the resource body for
    creates and updates. The resource is returned without its root key envelope.

    Also requires environment variables:
    - SHOPIFY_SHOP: Shop handle or myshopify.com domain
    - SHOPIFY_PRIVATE_APP: true for private apps, false for public apps
    - SHOPIFY_API_KEY and SHOPIFY_PASSWORD: Private app credentials
    - SHOPIFY_ACCESS_TOKEN: Public app access token
    """
    if not validate_auth_token(auth_token):
        return auth_failed_response()

    args = parse_arguments(arguments)
    result = get_shopify_client().invoke(operation, args)

    return format_success_response(result, metadata={"operation": operation})


@handle_shopify_errors
def iterate_operation(
    auth_token: Annotated[
        str,
        "Authentication token obtained from get_auth_token(). Required for this function to work.",
    ],
    operation: Annotated[str, "List operation name, e.g. 'getProducts', 'getOrders'"],
    arguments: Annotated[str, "JSON object of extra arguments (e.g., '{\"status\": \"any\"}')"] = "{}",
    max_items: Annotated[int, "Maximum number of items to retrieve (default 1000)"] = DEFAULT_MAX_ITEMS,
) -> str:
    """Retrieve every item of a Shopify collection, page by page, ordered by id.

    REQUIRES AUTHENTICATION: You must provide a valid auth_token obtained from get_auth_token().

    Pages of 250 items are requested with an advancing since_id until a short
    page is returned or max_items items have been collected.
    """
    if not validate_auth_token(auth_token):
        return auth_failed_response()

    if max_items < 1:
        raise ValueError("max_items must be a positive integer")

    iterator = get_shopify_client().iterate(operation, parse_arguments(arguments))
    items = list(itertools.islice(iterator, max_items))

    return format_success_response(
        items,
        metadata={
            "operation": operation,
            "items_retrieved": len(items),
            "pages_fetched": iterator.pages_fetched,
            "last_since_id": iterator.cursor.since_id,
        },
    )


for tool_fn in (get_auth_token, list_operations, call_operation, iterate_operation):
    mcp.tool(tool_fn)


def main() -> None:
    """Entry point for the MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
