import math
from dataclasses import dataclass
from typing import Any, List, Sequence


@dataclass
class Page:
    items: List[Any]
    page: int
    total_pages: int
    total_items: int

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(items: Sequence[Any], page: int, per_page: int) -> Page:
    # Out-of-range pages clamp; an empty list still has one (empty) page
    total = len(items)
    total_pages = max(1, math.ceil(total / per_page))
    page = min(max(1, page), total_pages)
    start = (page - 1) * per_page
    return Page(items=list(items[start:start + per_page]), page=page, total_pages=total_pages, total_items=total)
