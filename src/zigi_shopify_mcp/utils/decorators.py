"""Decorators for Shopify error handling in MCP tools."""

import functools
import json
import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Optional

from ..constants import ERROR_CODES
from ..exceptions import (
    ApiError,
    ConfigError,
    DecodeError,
    InvalidArgumentsError,
    RateLimitError,
    TransportError,
    UnknownOperationError,
)

logger = logging.getLogger(__name__)


def format_success_response(data: Any, metadata: Optional[dict[str, Any]] = None) -> str:
    """Serialize a success envelope.

    Args:
        data: The response data
        metadata: Optional metadata to include

    Returns:
        JSON string of the success response
    """
    response: dict[str, Any] = {
        "success": True,
        "data": data,
        "metadata": {
            "timestamp": datetime.now().isoformat() + "Z",
            "request_id": str(uuid.uuid4()),
        },
    }

    if metadata:
        response["metadata"].update(metadata)

    return json.dumps(response, indent=2, default=str)


def format_error_response(error_code: str, message: str, request_id: str, **extra: Any) -> str:
    """Serialize an error envelope.

    Args:
        error_code: Standard error code (api_error, rate_limit_exceeded, etc.)
        message: Human-readable error message
        request_id: Identifier of the failed request
        **extra: Additional top-level fields (details, status_code, retry_after)

    Returns:
        JSON string of the error response
    """
    response = {
        "success": False,
        "error": error_code,
        "error_description": ERROR_CODES.get(error_code),
        "message": message,
        **{key: value for key, value in extra.items() if value is not None},
        "metadata": {
            "timestamp": datetime.now().isoformat() + "Z",
            "request_id": request_id,
        },
    }
    return json.dumps(response, indent=2)


def handle_shopify_errors(func: Callable[..., str]) -> Callable[..., str]:
    """Decorator to handle Shopify client errors consistently.

    Exceptions raised by the wrapped tool are logged and turned into JSON
    error envelopes so the MCP caller always receives a string.

    Args:
        func: The function to decorate

    Returns:
        Decorated function that handles errors consistently
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> str:
        request_id = str(uuid.uuid4())
        start_time = datetime.now()

        def elapsed_ms() -> int:
            return int((datetime.now() - start_time).total_seconds() * 1000)

        try:
            logger.info(f"Request {request_id}: Starting {func.__name__}")
            result = func(*args, **kwargs)
            logger.info(f"Request {request_id}: Completed {func.__name__} in {elapsed_ms()}ms")
            return result

        except RateLimitError as e:
            logger.warning(f"Request {request_id}: Rate limit exceeded in {elapsed_ms()}ms")
            return format_error_response(
                "rate_limit_exceeded",
                "Rate limit exceeded. Please wait before making another request.",
                request_id,
                retry_after=e.retry_after,
            )

        except ApiError as e:
            logger.exception(f"Request {request_id}: HTTP error {e.status_code} in {elapsed_ms()}ms")
            return format_error_response(
                "api_error",
                str(e),
                request_id,
                status_code=e.status_code,
                details=e.errors,
            )

        except TransportError as e:
            logger.exception(f"Request {request_id}: Network error in {elapsed_ms()}ms")
            return format_error_response("network_error", str(e), request_id)

        except ConfigError as e:
            logger.exception(f"Request {request_id}: Configuration error: {e}")
            return format_error_response("config_error", str(e), request_id)

        except UnknownOperationError as e:
            logger.warning(f"Request {request_id}: Unknown operation {e.operation}")
            return format_error_response("unknown_operation", str(e), request_id)

        except DecodeError as e:
            logger.exception(f"Request {request_id}: Decode error in {elapsed_ms()}ms")
            return format_error_response("decode_error", str(e), request_id)

        except (InvalidArgumentsError, ValueError) as e:
            logger.exception(f"Request {request_id}: Validation error in {elapsed_ms()}ms: {e}")
            return format_error_response("invalid_input", str(e), request_id)

        except Exception as e:
            logger.exception(f"Request {request_id}: Unexpected error in {elapsed_ms()}ms: {e}")
            return format_error_response("unexpected_error", f"An unexpected error occurred: {e!s}", request_id)

    return wrapper
