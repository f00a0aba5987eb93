"""
Filtering and pagination over in‑memory collections.

A filter is a plain predicate ``entity -> bool``.  The factories below
return ``None`` for an absent or empty filter value, and ``None``
filters are skipped, so handlers can pass query parameters straight
through without checking them first.  Several filters are combined
with logical AND.

Pagination always runs over the complete filtered list: the page
metadata describes the whole filtered set even when the requested page
lies past its end.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from ..core.config import settings
from ..schemas.common import Page

T = TypeVar("T")
Predicate = Callable[[T], bool]


def _texts(value: Any) -> List[str]:
    """Flatten a field value into the strings a search looks at."""
    if value is None:
        return []
    if isinstance(value, Enum):
        return [str(value.value)]
    if isinstance(value, str):
        return [value]
    if isinstance(value, Iterable):
        texts: List[str] = []
        for item in value:
            texts.extend(_texts(item))
        return texts
    return [str(value)]


def status_filter(status: Optional[str], field: str = "status") -> Optional[Predicate]:
    """Exact, case‑insensitive match on ``entity.<field>``."""
    if not status:
        return None
    wanted = status.lower()

    def predicate(entity: Any) -> bool:
        return any(text.lower() == wanted for text in _texts(getattr(entity, field, None)))

    return predicate


def search_filter(term: Optional[str], *fields: Callable[[Any], Any]) -> Optional[Predicate]:
    """Case‑insensitive substring match against any of ``fields``.

    Each field is a callable returning a string, an enum or an iterable
    of strings (for example the names of an order's items).
    """
    if term is None or not term.strip():
        return None
    needle = term.lower()

    def predicate(entity: Any) -> bool:
        return any(needle in text.lower() for field in fields for text in _texts(field(entity)))

    return predicate


def apply_filters(entities: Iterable[T], filters: Sequence[Optional[Predicate]]) -> List[T]:
    active = [predicate for predicate in filters if predicate is not None]
    return [entity for entity in entities if all(predicate(entity) for predicate in active)]


def normalize_paging(
    page: int,
    size: int,
    default_size: Optional[int] = None,
    max_size: Optional[int] = None,
) -> Tuple[int, int]:
    """Clamp a negative page to 0 and an out‑of‑range size to the default."""
    default_size = default_size or settings.default_page_size
    max_size = max_size or settings.max_page_size
    if page < 0:
        page = 0
    if size < 1 or size > max_size:
        size = default_size
    return page, size


def paginate(items: Sequence[T], page: int, size: int) -> Page:
    """Slice ``items`` into ``Page`` number ``page`` of ``size`` elements.

    ``page`` and ``size`` must already be normalised.
    """
    total = len(items)
    total_pages = math.ceil(total / size) if total else 0
    start = page * size
    content = list(items[start:min(start + size, total)]) if start < total else []
    return Page(
        content=content,
        page=page,
        size=size,
        total_elements=total,
        total_pages=total_pages,
    )


class QueryEngine:
    """Entry point combining filtering and pagination."""

    @classmethod
    def page(
        cls,
        entities: Iterable[T],
        filters: Sequence[Optional[Predicate]] = (),
        page: int = 0,
        size: Optional[int] = None,
        default_size: Optional[int] = None,
        max_size: Optional[int] = None,
    ) -> Page:
        """Filter ``entities`` and return the requested page.

        ``entities`` is expected in store insertion order; the order is
        kept as is, so identical inputs always give identical pages.
        """
        if size is None:
            size = default_size or settings.default_page_size
        page, size = normalize_paging(page, size, default_size, max_size)
        return paginate(apply_filters(entities, filters), page, size)
