"""HTTP transport for Shopify API requests."""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol

import requests
from requests.structures import CaseInsensitiveDict

from ..constants import DEFAULT_TIMEOUT
from ..exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Request:
    """A fully built HTTP request, ready to be sent."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)
    body: Optional[bytes] = None
    auth: Optional[tuple[str, str]] = field(default=None, repr=False)


@dataclass(frozen=True)
class Response:
    """Status, headers and raw body of an HTTP response."""

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """Anything able to send a Request and return a Response.

    Implementations raise TransportError when no response was received and
    must be safe to share between concurrent calls.
    """

    def send(self, request: Request) -> Response: ...


class RequestsTransport:
    """Transport backed by a pooled requests.Session."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout

    def send(self, request: Request) -> Response:
        """Send a request.

        Args:
            request: The request to send

        Returns:
            The response, whatever its status code

        Raises:
            TransportError: When the connection fails or times out
        """
        try:
            response = self.session.request(
                method=request.method,
                url=request.url,
                params=request.params or None,
                data=request.body,
                headers=request.headers,
                auth=request.auth,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"No response for {request.method} {request.url}: {e}")
            raise TransportError(f"Could not reach Shopify: {e}") from e

        return Response(
            status_code=response.status_code,
            headers=CaseInsensitiveDict(response.headers),
            body=response.content,
        )

    def close(self) -> None:
        self.session.close()
