"""
Generic pagination utilities shared by every listing view.

This module turns raw query-string values plus a row count into a
PaginationDescriptor, builds the page-number strip shown under a listing,
and rewrites query strings for "page N" links.

Everything here is pure: no database access, no request state.

For paginated post queries, see blog.repositories.post_repository.
"""

import math
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union
from urllib.parse import urlencode

ELLIPSIS = "..."

PageWindow = List[Union[int, str]]

_DIGITS = re.compile(r"^[0-9]+$")

# Largest value a database integer column or OFFSET/LIMIT bind accepts
MAX_QUERY_INT = 2**63 - 1
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PaginationDescriptor:
    """
    Pagination state for one request. Never mutated after construction.

    Attributes:
        total: Total number of rows matching the listing filter
        page_size: Rows per page (>= 1)
        current_page: Requested page, 1-indexed. May exceed total_pages.
        total_pages: ceil(total / page_size), 0 for an empty listing
    """

    total: int
    page_size: int
    current_page: int
    total_pages: int

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def previous_page(self) -> int:
        return max(1, self.current_page - 1)

    @property
    def next_page(self) -> int:
        return self.current_page + 1

    @property
    def show_controls(self) -> bool:
        """Prev/next controls are only rendered when there is somewhere to go."""
        return self.total_pages > 1


def parse_positive_int(
    raw: Optional[str], default: int, maximum: int = MAX_QUERY_INT
) -> int:
    """
    Parse a query-string value as a positive integer.

    Missing, blank, non-numeric, zero, negative and oversized (> `maximum`)
    values all yield `default`. Only plain ASCII digits are accepted, so
    "2abc" and "1.5" are rejected rather than partially parsed. The length
    is checked before conversion, so huge digit strings are cheap to reject.

    Examples:
        >>> parse_positive_int("3", 1)
        3
        >>> parse_positive_int("abc", 1)
        1
        >>> parse_positive_int("0", 5)
        5
    """
    if raw is None:
        return default

    value = str(raw).strip()
    if not _DIGITS.match(value):
        return default

    value = value.lstrip("0")
    if not value or len(value) > len(str(maximum)):
        return default

    number = int(value)
    return number if number <= maximum else default


def resolve_pagination(
    raw_current_page: Optional[str],
    raw_page_size: Optional[str],
    total: int,
    default_page_size: int = 5,
    allowed_page_sizes: Optional[Iterable[int]] = None,
    max_page_size: int = MAX_PAGE_SIZE,
) -> PaginationDescriptor:
    """
    Build a PaginationDescriptor from raw query parameters and a row count.

    Invalid input never fails the request: a bad page falls back to 1 and a
    bad or oversized page size to `default_page_size`. A page whose offset
    would overflow a 64-bit bind also counts as bad. Otherwise the current
    page is not clamped to total_pages; a page past the end resolves to an
    empty slice.

    Args:
        raw_current_page: Raw `page` query value, or None
        raw_page_size: Raw `pageSize` query value, or None
        total: Row count from the count query (>= 0)
        default_page_size: Fallback page size (>= 1)
        allowed_page_sizes: Optional whitelist of selectable page sizes
        max_page_size: Largest page size accepted without a whitelist

    Returns:
        PaginationDescriptor whose offset/limit are safe for a bounded fetch

    Example:
        >>> p = resolve_pagination("abc", "5", 12)
        >>> (p.current_page, p.total_pages, p.offset)
        (1, 3, 0)
    """
    default_page_size = max(1, default_page_size)

    current_page = parse_positive_int(raw_current_page, 1)
    page_size = parse_positive_int(
        raw_page_size, default_page_size, max(max_page_size, default_page_size)
    )

    if allowed_page_sizes is not None and page_size not in set(allowed_page_sizes):
        page_size = default_page_size

    # A page whose offset no database can bind counts as an invalid page
    if (current_page - 1) * page_size > MAX_QUERY_INT:
        current_page = 1

    total = max(0, total)
    total_pages = math.ceil(total / page_size)

    return PaginationDescriptor(
        total=total,
        page_size=page_size,
        current_page=current_page,
        total_pages=total_pages,
    )


def build_page_window(
    current_page: int, total_pages: int, max_visible: int = 5
) -> PageWindow:
    """
    Build the page-number strip for navigation UI.

    A run of at most `max_visible` pages is centred on the current page.
    The first and last pages are always reachable, with ELLIPSIS marking a
    gap of one or more hidden pages.

    When the requested page lies past the end, the run is anchored on the
    last page so the strip still leads back into the listing.

    Examples:
        >>> build_page_window(10, 20)
        [1, '...', 8, 9, 10, 11, 12, '...', 20]
        >>> build_page_window(1, 3)
        [1, 2, 3]
        >>> build_page_window(1, 0)
        []
    """
    if total_pages <= 0:
        return []

    max_visible = max(1, max_visible)
    anchor = min(max(1, current_page), total_pages)

    start = max(1, anchor - max_visible // 2)
    end = min(total_pages, start + max_visible - 1)

    window: PageWindow = []

    if start > 1:
        window.append(1)
        if start > 2:
            window.append(ELLIPSIS)

    window.extend(range(start, end + 1))

    if end < total_pages:
        if end < total_pages - 1:
            window.append(ELLIPSIS)
        window.append(total_pages)

    return window


def build_page_query(
    query_params: Iterable[Tuple[str, str]], **overrides: Union[int, str]
) -> str:
    """
    Rewrite a query string, replacing only the given keys.

    Every other parameter (e.g. `category`) is kept verbatim and in its
    original position. Overridden keys that were absent are appended.

    Args:
        query_params: (key, value) pairs, e.g. request.query_params.multi_items()
        **overrides: Keys to set, e.g. page=2 or pageSize=10

    Returns:
        Query string starting with "?"

    Example:
        >>> build_page_query([("category", "3"), ("page", "1")], page=2)
        '?category=3&page=2'
    """
    items: List[Tuple[str, str]] = []
    replaced = set()

    for key, value in query_params:
        if key in overrides:
            if key in replaced:
                continue
            items.append((key, str(overrides[key])))
            replaced.add(key)
        else:
            items.append((key, value))

    for key, value in overrides.items():
        if key not in replaced:
            items.append((key, str(value)))

    return "?" + urlencode(items)
