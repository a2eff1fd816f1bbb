"""Lazy since_id pagination over Shopify resource collections."""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping, Optional

from ..constants import ITERATOR_PAGE_SIZE
from ..exceptions import DecodeError
from ..utils.validators import validate_since_id

logger = logging.getLogger(__name__)

PageFetcher = Callable[[dict[str, Any]], Any]


@dataclass
class PageCursor:
    """Position of an iteration: fetch items with an id greater than since_id."""

    since_id: int = 0
    page_size: int = ITERATOR_PAGE_SIZE


class PaginationIterator(Iterator[Any]):
    """Yield every item of a collection, one page fetch at a time.

    Shopify sorts list endpoints by title unless ``since_id`` is given, so
    the iterator always sends one (0 by default) and forces the largest page
    size. A page shorter than the page size, including an empty one, ends
    the iteration. Pages are fetched only when the consumer asks for an item
    beyond the current page, so stopping early never triggers another call.

    An iterator is single use; start a new one to scan again.
    """

    def __init__(
        self,
        fetch_page: PageFetcher,
        args: Optional[Mapping[str, Any]] = None,
        page_size: int = ITERATOR_PAGE_SIZE,
        operation: Optional[str] = None,
    ) -> None:
        self._fetch_page = fetch_page
        self._args = dict(args or {})
        since_id = self._args.pop("since_id", None)
        if since_id is None:
            since_id = 0
        elif not validate_since_id(since_id):
            raise ValueError(f"since_id must be a non-negative integer, got {since_id!r}")
        self._args.pop("limit", None)
        self.cursor = PageCursor(since_id=since_id, page_size=page_size)
        self.operation = operation
        self.pages_fetched = 0
        self._buffer: deque[Any] = deque()
        self._finished = False

    def __iter__(self) -> "PaginationIterator":
        return self

    def __next__(self) -> Any:
        while not self._buffer:
            if self._finished:
                raise StopIteration
            self._fetch_next_page()

        return self._buffer.popleft()

    def _fetch_next_page(self) -> None:
        args = {**self._args, "limit": self.cursor.page_size, "since_id": self.cursor.since_id}
        logger.debug(f"Fetching page {self.pages_fetched + 1} of {self.operation} since_id={self.cursor.since_id}")

        try:
            page = self._fetch_page(args)
            if not isinstance(page, list):
                raise DecodeError(
                    f"Expected a list of items, got {type(page).__name__}", operation=self.operation
                )
            self.pages_fetched += 1

            if len(page) < self.cursor.page_size:
                self._finished = True
            else:
                self.cursor.since_id = self._identity(page[-1])
        except Exception:
            self._finished = True
            raise

        self._buffer.extend(page)

    def _identity(self, item: Any) -> int:
        if not isinstance(item, dict) or "id" not in item:
            raise DecodeError("Last item of the page has no id to advance the cursor", operation=self.operation)
        return item["id"]
