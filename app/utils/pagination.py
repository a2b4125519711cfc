"""
Pagination utilities for offset-based paging over precomputed lists.

Ranked recommendation lists are computed once and cached whole, so pages
are plain slices of that list rather than database OFFSET/LIMIT queries.
"""

from typing import List, Sequence, Tuple, TypeVar

T = TypeVar("T")

MAX_PAGE_SIZE = 50


def paginate_slice(items: Sequence[T], offset: int, limit: int) -> Tuple[List[T], bool, int]:
    """
    Cut one page out of a fully materialized list.

    Args:
        items: The complete ordered list
        offset: Number of items to skip (0-indexed)
        limit: Maximum number of items to return

    Returns:
        Tuple of (page items, has_more, total)

    Example:
        >>> paginate_slice([1, 2, 3, 4, 5], offset=0, limit=2)
        ([1, 2], True, 5)
        >>> paginate_slice([1, 2, 3, 4, 5], offset=4, limit=2)
        ([5], False, 5)
        >>> paginate_slice([], offset=0, limit=20)
        ([], False, 0)
    """
    if offset < 0:
        raise ValueError("Offset must be >= 0")
    if limit < 1:
        raise ValueError("Limit must be >= 1")

    total = len(items)
    return list(items[offset:offset + limit]), offset + limit < total, total

