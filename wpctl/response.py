"""Paged responses for list endpoints.

A ``PagedResponse`` is an immutable snapshot of one page: its items, the URL
that produced it and the links to its neighbours. Moving to another page is
done by the client (``WordpressClient.traverse``), which returns a new
snapshot and leaves the current one untouched.
"""

import logging
from enum import Enum
from typing import Generic, List, Optional, Tuple, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class Direction(str, Enum):
    """Which neighbour of a page to fetch."""

    NEXT = "next"
    PREVIOUS = "prev"


class PagedResponse(Generic[T]):
    """One page of a list endpoint's results."""

    NEXT = Direction.NEXT
    PREVIOUS = Direction.PREVIOUS

    __slots__ = ("_items", "_self_url", "_next_url", "_previous_url", "_entity_type", "_total", "_total_pages")

    def __init__(
        self,
        items: List[T],
        self_url: str,
        entity_type: type,
        next_url: Optional[str] = None,
        previous_url: Optional[str] = None,
        total: Optional[int] = None,
        total_pages: Optional[int] = None,
    ) -> None:
        """Initialize the page.

        Args:
            items: Decoded entities, in server order
            self_url: URL (with query) that produced this page
            entity_type: Model class the items were decoded into
            next_url: Link to the following page, if any
            previous_url: Link to the preceding page, if any
            total: Total number of matching entities, if reported
            total_pages: Total number of pages, if reported
        """
        self._items: Tuple[T, ...] = tuple(items)
        self._self_url = self_url
        self._entity_type = entity_type
        self._next_url = next_url or None
        self._previous_url = previous_url or None
        self._total = total
        self._total_pages = total_pages

    @property
    def items(self) -> List[T]:
        """Entities on this page. A fresh list on every access."""
        return list(self._items)

    @property
    def self_url(self) -> str:
        return self._self_url

    @property
    def next_url(self) -> Optional[str]:
        return self._next_url

    @property
    def previous_url(self) -> Optional[str]:
        return self._previous_url

    @property
    def entity_type(self) -> type:
        return self._entity_type

    @property
    def total(self) -> Optional[int]:
        return self._total

    @property
    def total_pages(self) -> Optional[int]:
        return self._total_pages

    def has_next(self) -> bool:
        return self._next_url is not None

    def has_previous(self) -> bool:
        return self._previous_url is not None

    def link(self, direction: Direction) -> Optional[str]:
        """Return the link in ``direction``, or None at the end of the sequence."""
        if Direction(direction) is Direction.NEXT:
            return self._next_url
        return self._previous_url

    def debug(self) -> None:
        """Log this page's links and size."""
        logger.debug(
            "self: %s, next: %s, previous: %s, items: %d",
            self._self_url,
            self._next_url,
            self._previous_url,
            len(self._items),
        )

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __repr__(self) -> str:
        return (
            f"PagedResponse[{self._entity_type.__name__}](self={self._self_url!r}, "
            f"items={len(self._items)}, next={self._next_url!r}, previous={self._previous_url!r})"
        )
