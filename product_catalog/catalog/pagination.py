"""Pagination arithmetic.

Pure functions that turn a collection length and a requested page into
slice bounds and summary metadata. Out-of-range pages are not errors:
they select nothing and report ``showing == 0``.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 100


def _positive_int(raw: str | int | None, default: int) -> int:
    """Parse a positive integer, falling back to ``default``."""
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class PaginationRequest:
    """Requested page.

    Attributes:
        page: Page number (1-indexed).
        page_size: Items per page.
    """

    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_query(
        cls, page: str | int | None = None, size: str | int | None = None
    ) -> "PaginationRequest":
        """Build from raw query values.

        Absent or unparseable values, and values below 1, fall back to
        the defaults independently of each other.
        """
        return cls(
            page=_positive_int(page, DEFAULT_PAGE),
            page_size=_positive_int(size, DEFAULT_PAGE_SIZE),
        )


@dataclass(frozen=True)
class PaginationResult:
    """Summary metadata for one page.

    Attributes:
        page: Requested page number.
        page_size: Requested page size.
        total: Number of items in the whole collection.
        total_pages: Number of non-empty pages (0 for an empty collection).
        showing: Number of items on this page.
    """

    page: int
    page_size: int
    total: int
    total_pages: int
    showing: int


@dataclass(frozen=True)
class PageWindow:
    """Slice bounds for one page together with its metadata."""

    start: int
    end: int
    result: PaginationResult

    def slice(self, items: Sequence[T]) -> list[T]:
        """Select this page's items from the full sequence."""
        if self.result.showing == 0:
            return []
        return list(items[self.start : self.end])


def paginate(total: int, page: int, page_size: int) -> PageWindow:
    """Compute the window for ``page`` over ``total`` items.

    Args:
        total: Length of the full sequence.
        page: Page number (1-indexed).
        page_size: Items per page.

    Values below 1 fall back to the defaults, as in
    ``PaginationRequest.from_query``.

    Returns:
        Window with start/end indices and pagination metadata.
    """
    page = _positive_int(page, DEFAULT_PAGE)
    page_size = _positive_int(page_size, DEFAULT_PAGE_SIZE)
    start = (page - 1) * page_size
    end = min(start + page_size, total)
    showing = end - start if start < total else 0
    total_pages = 0 if total == 0 else (total + page_size - 1) // page_size

    return PageWindow(
        start=start,
        end=end,
        result=PaginationResult(
            page=page,
            page_size=page_size,
            total=total,
            total_pages=total_pages,
            showing=showing,
        ),
    )
