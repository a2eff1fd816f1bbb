"""Constants and configuration for the Shopify REST Admin API."""

# Shops live under this domain; callers may pass either "acme" or "acme.myshopify.com"
SHOP_DOMAIN_SUFFIX = ".myshopify.com"

# Header carrying the OAuth access token for public apps
ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"

USER_AGENT = "ZigiShopifyMCP/1.0 (Language=Python)"

# HTTP methods whose body is nested under the operation root key
BODY_METHODS = frozenset({"POST", "PUT"})

SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})

# Default request timeout (seconds)
DEFAULT_TIMEOUT = 30

# Retry policy: 1 initial attempt + MAX_RETRIES, waiting RETRY_DELAY_STEP_MS * retries
MAX_RETRIES = 5
RETRY_DELAY_STEP_MS = 1000

RATE_LIMIT_STATUS = 429

# Largest page Shopify serves; iterators always request it
ITERATOR_PAGE_SIZE = 250

# Environment variables read by ConnectionConfig.from_env
ENV_VARS = {
    "shop": "SHOPIFY_SHOP",
    "private_app": "SHOPIFY_PRIVATE_APP",
    "api_key": "SHOPIFY_API_KEY",
    "password": "SHOPIFY_PASSWORD",
    "access_token": "SHOPIFY_ACCESS_TOKEN",
}

TRUTHY_VALUES = {"true", "1", "yes"}
FALSY_VALUES = {"false", "0", "no"}

# Error codes used in MCP tool error envelopes
ERROR_CODES = {
    "auth_failed": "Invalid or missing session token",
    "config_error": "Connection options are missing or malformed",
    "unknown_operation": "Operation is not in the catalog",
    "invalid_input": "Validation failures",
    "rate_limit_exceeded": "429 errors after all retries",
    "api_error": "Shopify returned an error",
    "network_error": "Connection issues",
    "decode_error": "Response body could not be decoded",
    "unexpected_error": "Unhandled exceptions",
}

# Default cap on items drained by the iterate_operation tool
DEFAULT_MAX_ITEMS = 1000
