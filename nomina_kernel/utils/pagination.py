"""
Pagination helpers for employee and report listings.

Pure functions: page math, the page-button window with ellipses, request
parameter normalisation and slicing.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

ELLIPSIS = "..."
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
PAGE_SIZE_OPTIONS: tuple[int, ...] = (10, 25, 50, 100)
DEFAULT_SORT_BY = "created_at"


@dataclass(frozen=True)
class PaginationParams:
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = "desc"


@dataclass(frozen=True)
class PaginationInfo:
    page: int
    page_size: int
    total: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


@dataclass(frozen=True)
class Paginated(Generic[T]):
    """One slice of a listing plus its pagination info."""
    items: tuple[T, ...]
    info: PaginationInfo


def calculate_pagination(total: int, page: int, page_size: int) -> PaginationInfo:
    """Page count and navigation flags for ``total`` items."""
    if page_size < 1:
        raise ValueError("page_size must be positive")
    total_pages = -(-total // page_size)
    return PaginationInfo(
        page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )


def pagination_range(
    current_page: int,
    total_pages: int,
    max_buttons: int = 7,
) -> list[int | str]:
    """
    Page numbers to render, with ``"..."`` where pages are skipped.

    Examples (10 pages, 7 buttons)::

        page 2  -> [1, 2, 3, 4, 5, "...", 10]
        page 9  -> [1, "...", 6, 7, 8, 9, 10]
        page 5  -> [1, "...", 3, 4, 5, "...", 10]
    """
    if total_pages <= max_buttons:
        return list(range(1, total_pages + 1))

    half = max_buttons // 2
    left_ellipsis = current_page > half + 1
    right_ellipsis = current_page < total_pages - half

    if not left_ellipsis and right_ellipsis:
        return [*range(1, max_buttons - 1), ELLIPSIS, total_pages]

    if left_ellipsis and not right_ellipsis:
        first = total_pages - (max_buttons - 3)
        return [1, ELLIPSIS, *range(first, first + max_buttons - 2)]

    if left_ellipsis and right_ellipsis:
        first = current_page - half + 1
        return [1, ELLIPSIS, *range(first, first + max_buttons - 4), ELLIPSIS, total_pages]

    return list(range(1, total_pages + 1))


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def normalize_pagination_params(
    page: Any = None,
    page_size: Any = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
    max_page_size: int = MAX_PAGE_SIZE,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> PaginationParams:
    """
    Clamp raw request values into a usable ``PaginationParams``.

    Page is at least 1; page size falls back to the default when missing or
    zero and is clamped to ``[1, max_page_size]``; sort order is ``asc``
    only when asked for explicitly.
    """
    return PaginationParams(
        page=max(1, _as_int(page) or 1),
        page_size=min(max_page_size, max(1, _as_int(page_size) or default_page_size)),
        sort_by=sort_by or DEFAULT_SORT_BY,
        sort_order="asc" if sort_order == "asc" else "desc",
    )


def calculate_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def paginate(items: Sequence[T], page: int, page_size: int) -> Paginated[T]:
    """Slice ``items`` for ``page``; pages past the end are empty."""
    info = calculate_pagination(len(items), page, page_size)
    offset = calculate_offset(page, page_size)
    return Paginated(items=tuple(items[offset:offset + page_size]), info=info)
