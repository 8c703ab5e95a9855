from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Optional, Sequence, TypeVar

from .errors import InvalidPageError

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of an ordered source plus the size of the whole source."""

    items: tuple[T, ...]
    total_count: int
    page: int
    page_size: int

    @property
    def page_count(self) -> int:
        if self.total_count <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def is_partial(self) -> bool:
        return len(self.items) < self.total_count

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


def paginate(
    source: Sequence[T],
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    *,
    default_page_size: int = 125,
) -> Page[T]:
    size = default_page_size if page_size is None else int(page_size)
    number = 1 if page is None else int(page)
    if size < 1:
        raise InvalidPageError(f"page size must be at least 1, got {size}")
    if number < 1:
        raise InvalidPageError(f"page must be at least 1, got {number}")

    offset = (number - 1) * size
    return Page(
        items=tuple(source[offset:offset + size]),
        total_count=len(source),
        page=number,
        page_size=size,
    )
