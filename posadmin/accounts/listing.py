"""
In-memory search and pagination over an already sorted profile list.

The full scoped result set is fetched first; the search term and the page
window are applied here, in that order.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Sequence, TypeVar, Union

from .schemas import Profile

T = TypeVar("T")

ELLIPSIS = "..."
SIBLING_COUNT = 2


@dataclass(frozen=True)
class ListingQuery:
    """Search term + page position of an account list view."""

    search: str = ""
    page: int = 1
    page_size: int = 10

    def with_search(self, search: str) -> "ListingQuery":
        return replace(self, search=search, page=1)

    def with_page_size(self, page_size: int) -> "ListingQuery":
        return replace(self, page_size=page_size, page=1)

    def with_page(self, page: int) -> "ListingQuery":
        return replace(self, page=page)


@dataclass
class Page:
    items: list
    page: int
    page_size: int
    total: int
    total_pages: int
    links: list = field(default_factory=list)

    @property
    def start_index(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def end_index(self) -> int:
        return min(self.start_index + self.page_size, self.total)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def summary(self) -> dict:
        """The "Showing X to Y of Z results" numbers."""
        return {
            "from": self.start_index + 1 if self.items else 0,
            "to": self.end_index if self.items else 0,
            "of": self.total,
        }

    def to_dict(self) -> dict:
        return {
            "items": [
                i.model_dump(mode="json") if hasattr(i, "model_dump") else i
                for i in self.items
            ],
            "page": self.page,
            "page_size": self.page_size,
            "total": self.total,
            "total_pages": self.total_pages,
            "has_previous": self.has_previous,
            "has_next": self.has_next,
            "showing": self.summary(),
            "links": self.links,
        }


def filter_by_fullname(profiles: Sequence[Profile], term: str) -> list[Profile]:
    """Profiles whose fullname contains `term`, case-insensitively, order kept."""
    needle = (term or "").lower()
    if not needle:
        return list(profiles)
    return [p for p in profiles if needle in p.fullname.lower()]


def page_count(total: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return math.ceil(total / page_size)


def page_window(
    current: int, total_pages: int, siblings: int = SIBLING_COUNT
) -> list[Union[int, str]]:
    """
    Page links to render: first, last, and `siblings` pages around the
    current one, with ELLIPSIS marking gaps. Empty for a single page.
    """
    if total_pages <= 1:
        return []

    links: list[Union[int, str]] = [1]
    start = max(2, current - siblings)
    end = min(total_pages - 1, current + siblings)

    if start > 2:
        links.append(ELLIPSIS)
    links.extend(range(start, end + 1))
    if end < total_pages - 1:
        links.append(ELLIPSIS)

    links.append(total_pages)
    return links


def paginate(items: Sequence[T], page: int, page_size: int) -> Page:
    """Slice page `page` (1-indexed) out of `items`."""
    if page < 1:
        raise ValueError("page must be at least 1")
    total = len(items)
    total_pages = page_count(total, page_size)
    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
        links=page_window(page, total_pages),
    )


def apply_listing(profiles: Sequence[Profile], query: ListingQuery) -> Page:
    return paginate(filter_by_fullname(profiles, query.search), query.page, query.page_size)
