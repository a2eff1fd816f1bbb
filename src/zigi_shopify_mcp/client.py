"""Shopify client facade and factory."""

import logging
from typing import Any, Mapping, Optional, Union

from .api.dispatcher import Dispatcher
from .api.pagination import PaginationIterator
from .api.retry import RetryPolicy
from .api.transport import RequestsTransport, Transport
from .catalog import OperationCatalog
from .config import ConnectionConfig

logger = logging.getLogger(__name__)


class ShopifyClient:
    """Client used to call the Shopify REST Admin API.

    Operations are looked up by name in the catalog, e.g.::

        client.invoke("getShop")
        client.invoke("createProduct", {"title": "Hat"})
        for product in client.iterate("getProducts"):
            ...
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    @property
    def config(self) -> ConnectionConfig:
        return self.dispatcher.config

    @property
    def catalog(self) -> OperationCatalog:
        return self.dispatcher.catalog

    def invoke(self, operation: str, args: Optional[Mapping[str, Any]] = None) -> Any:
        """Call one operation and return its unwrapped payload."""
        return self.dispatcher.invoke(operation, args)

    def iterate(self, operation: str, args: Optional[Mapping[str, Any]] = None) -> PaginationIterator:
        """Lazily iterate over every item a list operation can return.

        The operation is resolved before the first page is fetched, so an
        unknown name fails here rather than on the first ``next()``.
        """
        descriptor = self.catalog.resolve(operation)
        return PaginationIterator(
            lambda page_args: self.dispatcher.invoke(descriptor.name, page_args),
            args,
            operation=descriptor.name,
        )

    def operations(self) -> list[str]:
        return sorted(self.catalog)


def create_client(
    options: Union[ConnectionConfig, Mapping[str, Any]],
    transport: Optional[Transport] = None,
    retry_policy: Optional[RetryPolicy] = None,
    catalog: Optional[OperationCatalog] = None,
) -> ShopifyClient:
    """Build a ShopifyClient.

    Args:
        options: A ConnectionConfig, or raw options validated with ConnectionConfig.from_options
        transport: Transport to send requests with; defaults to a RequestsTransport
        retry_policy: Retry rules; defaults to RetryPolicy()
        catalog: Operation catalog; defaults to the bundled one

    Returns:
        A ready to use client

    Raises:
        ConfigError: If the options are invalid
    """
    config = options if isinstance(options, ConnectionConfig) else ConnectionConfig.from_options(options)

    dispatcher = Dispatcher(
        config=config,
        catalog=catalog if catalog is not None else OperationCatalog.load(),
        transport=transport if transport is not None else RequestsTransport(),
        retry_policy=retry_policy,
    )
    logger.debug(f"Created Shopify client for {config.base_url}")
    return ShopifyClient(dispatcher)
