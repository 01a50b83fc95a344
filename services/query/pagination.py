from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    items: list[T]
    page: int
    total_pages: int
    total: int

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(items: Sequence[T], page: int, per_page: int = 5) -> Page[T]:
    """Slice a result set; out-of-range pages are clamped to the nearest valid one."""
    if per_page < 1:
        raise ValueError("per_page must be >= 1")
    total = len(items)
    total_pages = math.ceil(total / per_page)
    page = max(1, min(page, total_pages or 1))
    start = (page - 1) * per_page
    return Page(
        items=list(items[start : start + per_page]),
        page=page,
        total_pages=total_pages,
        total=total,
    )
