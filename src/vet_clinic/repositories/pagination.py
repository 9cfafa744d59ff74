"""
Paging value objects shared by the repositories.
"""

import math
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 5


@dataclass(frozen=True)
class PageRequest:
    """
    Which slice of a result set to fetch.

    Attributes:
        page: Zero-based page index
        size: Rows per page, or None for the whole result set
    """

    page: int = 0
    size: Optional[int] = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("Page index must not be negative")
        if self.size is not None and self.size < 1:
            raise ValueError("Page size must be at least 1")

    @classmethod
    def unpaged(cls) -> "PageRequest":
        """Request every row in a single page."""
        return cls(page=0, size=None)

    @property
    def is_paged(self) -> bool:
        return self.size is not None

    @property
    def offset(self) -> int:
        if self.size is None:
            return 0
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    """
    One page of query results plus the total row count.

    Attributes:
        content: Rows on this page
        total_elements: Rows matching the query across all pages
        page: Zero-based index of this page
        size: Requested page size, None when unpaged
    """

    content: List[T] = field(default_factory=list)
    total_elements: int = 0
    page: int = 0
    size: Optional[int] = None

    @classmethod
    def empty(cls, page_request: Optional[PageRequest] = None) -> "Page[T]":
        """Build a page with no content for the given request."""
        request = page_request or PageRequest.unpaged()
        return cls(content=[], total_elements=0, page=request.page, size=request.size)

    @property
    def total_pages(self) -> int:
        if self.total_elements == 0:
            return 0
        if not self.size:
            return 1
        return math.ceil(self.total_elements / self.size)

    @property
    def is_empty(self) -> bool:
        return not self.content

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    def __len__(self) -> int:
        return len(self.content)

    def __iter__(self):
        return iter(self.content)
