"""Retry policy for transient Shopify API failures."""

import logging
import time
from typing import Callable, Optional

from ..constants import MAX_RETRIES, RATE_LIMIT_STATUS, RETRY_DELAY_STEP_MS
from ..exceptions import TransportError
from .transport import Request, Response, Transport

logger = logging.getLogger(__name__)


class RetryPolicy:
    """Retry connection failures and 429 responses with a linear backoff.

    A call makes at most ``1 + max_retries`` attempts. The retry counter
    lives in :meth:`send` and is never shared between calls, so a single
    policy can serve concurrent callers.
    """

    def __init__(
        self,
        max_retries: int = MAX_RETRIES,
        delay_step_ms: int = RETRY_DELAY_STEP_MS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.max_retries = max_retries
        self.delay_step_ms = delay_step_ms
        self._sleep = sleep

    def should_retry(
        self,
        retries: int,
        request: Request,
        response: Optional[Response] = None,
        error: Optional[Exception] = None,
    ) -> bool:
        """Decide whether another attempt should be made.

        Args:
            retries: Number of retries already made for this call
            request: The request that was attempted
            response: The response, if one was received
            error: The connection error, if no response was received

        Returns:
            True for connection failures and 429 responses while retries remain
        """
        if retries >= self.max_retries:
            return False

        if isinstance(error, TransportError) and response is None:
            return True

        return response is not None and response.status_code == RATE_LIMIT_STATUS

    def delay_millis(self, retries: int) -> int:
        """Milliseconds to wait before retry number ``retries``."""
        return self.delay_step_ms * retries

    def send(self, transport: Transport, request: Request) -> Response:
        """Send a request, retrying while :meth:`should_retry` allows.

        Returns:
            The last response received, successful or not

        Raises:
            TransportError: The last connection error, once retries are exhausted
        """
        retries = 0
        while True:
            response: Optional[Response] = None
            error: Optional[TransportError] = None
            try:
                response = transport.send(request)
            except TransportError as e:
                error = e

            if not self.should_retry(retries, request, response, error):
                if error is not None:
                    raise error
                return response

            retries += 1
            delay_ms = self.delay_millis(retries)
            reason = f"status={response.status_code}" if response is not None else f"error={error}"
            logger.warning(
                f"Retrying {request.method} {request.url} ({reason}), "
                f"retry {retries}/{self.max_retries} in {delay_ms}ms"
            )
            self._sleep(delay_ms / 1000)
