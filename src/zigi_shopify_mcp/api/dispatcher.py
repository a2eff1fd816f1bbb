"""Operation dispatcher: the single entry point for Shopify API calls."""

import logging
import uuid
from datetime import datetime
from typing import Any, Mapping, Optional

from ..catalog import OperationCatalog, OperationDescriptor
from ..config import ConnectionConfig
from ..constants import RATE_LIMIT_STATUS
from ..exceptions import ApiError, DecodeError, RateLimitError
from .envelope import decode_body, unwrap
from .request_builder import RequestBuilder
from .retry import RetryPolicy
from .transport import Response, Transport

logger = logging.getLogger(__name__)


class Dispatcher:
    """Resolve an operation, send it under the retry policy and unwrap the result."""

    def __init__(
        self,
        config: ConnectionConfig,
        catalog: OperationCatalog,
        transport: Transport,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            config: Validated connection options
            catalog: Operation descriptors to resolve names against
            transport: Sends requests; shared by every call
            retry_policy: Retry rules; defaults to RetryPolicy()
        """
        self.config = config
        self.catalog = catalog
        self.transport = transport
        self.retry_policy = retry_policy or RetryPolicy()
        self.request_builder = RequestBuilder(config)

    def invoke(self, operation_name: str, args: Optional[Mapping[str, Any]] = None) -> Any:
        """Call a Shopify operation and return its unwrapped payload.

        Args:
            operation_name: Catalog name or its lower camel-case alias, e.g. "getProducts"
            args: Path, query and body arguments for the operation

        Returns:
            The decoded response body, unwrapped from the operation root key

        Raises:
            UnknownOperationError: If the operation is not in the catalog
            InvalidArgumentsError: If required arguments are missing
            TransportError: If no response could be obtained after all retries
            RateLimitError: If Shopify still answers 429 after all retries
            ApiError: For any other non-success status
            DecodeError: If the body is not JSON or lacks the root key
        """
        operation = self.catalog.resolve(operation_name)
        command = self.request_builder.command(operation, args or {})
        request = self.request_builder.build(command)

        request_id = str(uuid.uuid4())
        start_time = datetime.now()
        logger.info(f"Request {request_id}: Starting {operation.name} {request.method} {request.url}")

        try:
            response = self.retry_policy.send(self.transport, request)
            self._raise_for_status(operation, response)
            payload = unwrap(decode_body(response, operation.name), operation.root_key, operation.name)
        except (ApiError, DecodeError) as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.error(f"Request {request_id}: {operation.name} failed in {duration_ms}ms: {e}")
            raise
        except Exception as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.error(f"Request {request_id}: Unexpected error in {duration_ms}ms: {e}")
            raise

        duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
        logger.info(
            f"Request {request_id}: Success in {duration_ms}ms, status={response.status_code}"
        )
        return payload

    def _raise_for_status(self, operation: OperationDescriptor, response: Response) -> None:
        if response.ok:
            return

        errors = self._extract_errors(response)
        if response.status_code == RATE_LIMIT_STATUS:
            retry_after = self._retry_after(response)
            raise RateLimitError(
                f"Rate limit exceeded calling {operation.name}",
                operation=operation.name,
                errors=errors,
                response=response,
                retry_after=retry_after,
            )

        raise ApiError(
            f"Shopify returned HTTP {response.status_code} for {operation.name}",
            response.status_code,
            operation=operation.name,
            errors=errors,
            response=response,
        )

    @staticmethod
    def _retry_after(response: Response) -> Optional[float]:
        try:
            return float(response.headers["Retry-After"])
        except (KeyError, ValueError):
            return None

    @staticmethod
    def _extract_errors(response: Response) -> Any:
        try:
            payload = decode_body(response)
        except DecodeError:
            return response.body.decode("utf-8", errors="replace") or None

        return payload.get("errors") if isinstance(payload, dict) else payload
