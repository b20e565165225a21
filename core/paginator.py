import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from core.errors import InvalidPagination
from core.options import PaginationConfig

T = TypeVar("T")

MAX_VISIBLE_PAGES = 5


@dataclass
class Page(Generic[T]):
    data: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int
    start_index: int
    end_index: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def clamp_pagination(
    page: int, page_size: int, max_page_size: int | None = None
) -> PaginationConfig:
    page_size = max(1, page_size)
    if max_page_size is not None:
        page_size = min(page_size, max_page_size)
    return PaginationConfig(page=max(1, page), page_size=page_size)


def validate_pagination(config: PaginationConfig) -> None:
    if config.page < 1:
        raise InvalidPagination(f"page must be >= 1, got {config.page}")
    if config.page_size < 1:
        raise InvalidPagination(f"page_size must be >= 1, got {config.page_size}")


def paginate(items: list[T], config: PaginationConfig) -> Page[T]:
    """Slice one page. A page past the end yields an empty slice."""
    validate_pagination(config)
    total = len(items)
    start = (config.page - 1) * config.page_size
    end = start + config.page_size
    data = items[start:end]
    return Page(
        data=data,
        total=total,
        page=config.page,
        page_size=config.page_size,
        total_pages=math.ceil(total / config.page_size),
        start_index=start,
        end_index=start + len(data),
    )


def page_numbers(
    current_page: int, total_pages: int, max_visible: int = MAX_VISIBLE_PAGES
) -> list[int | None]:
    """Page strip for pagination controls; None marks an ellipsis."""
    if total_pages <= max_visible:
        return list(range(1, total_pages + 1))

    half = max_visible // 2
    start = max(2, current_page - half)
    end = min(total_pages - 1, current_page + half)

    if current_page <= half + 1:
        end = min(total_pages - 1, max_visible - 1)
    if current_page >= total_pages - half:
        start = max(2, total_pages - max_visible + 2)

    pages: list[int | None] = [1]
    if start > 2:
        pages.append(None)
    pages.extend(range(start, end + 1))
    if end < total_pages - 1:
        pages.append(None)
    pages.append(total_pages)
    return pages
