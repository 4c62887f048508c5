"""Pagination — page-size clamping and metadata for list responses.

Invariants:
    - Effective page size is always within [1, maximum]
    - Effective page number is always >= 1
    - total_page_count = ceil(total_item_count / page_size), 0 when there are no items
    - Metadata is transient: recomputed per request, never persisted

Design Decisions:
    - Out-of-range values are clamped, not rejected: a list request never fails
      because of paging parameters
    - to_header() uses snake_case keys like every other JSON payload of the API
"""

import math
from dataclasses import dataclass

MAX_CITIES_PAGE_SIZE = 20
DEFAULT_CITIES_PAGE_SIZE = 10


def clamp_page_size(requested: int, maximum: int = MAX_CITIES_PAGE_SIZE) -> int:
    """Clamp requested page size into [1, maximum]."""
    return max(1, min(requested, maximum))


def clamp_page_number(requested: int) -> int:
    return max(1, requested)


def page_offset(page_number: int, page_size: int) -> int:
    """Index of the first item on the given (1-based) page."""
    return (page_number - 1) * page_size


@dataclass(frozen=True)
class PaginationMetadata:
    """Summary of a paged list: total count, page size and current page."""
    total_item_count: int
    page_size: int
    current_page: int

    @property
    def total_page_count(self) -> int:
        return math.ceil(self.total_item_count / self.page_size)

    def to_header(self) -> dict:
        """Serializable form surfaced in the X-Pagination response header."""
        return {
            "total_item_count": self.total_item_count,
            "total_page_count": self.total_page_count,
            "page_size": self.page_size,
            "current_page": self.current_page,
        }
