"""Shopify REST dispatch modules."""

from .dispatcher import Dispatcher
from .envelope import decode_body, unwrap, wrap
from .pagination import PageCursor, PaginationIterator
from .request_builder import Command, RequestBuilder
from .retry import RetryPolicy
from .transport import Request, RequestsTransport, Response, Transport

__all__ = [
    "Command",
    "Dispatcher",
    "PageCursor",
    "PaginationIterator",
    "Request",
    "RequestBuilder",
    "RequestsTransport",
    "Response",
    "RetryPolicy",
    "Transport",
    "decode_body",
    "unwrap",
    "wrap",
]
