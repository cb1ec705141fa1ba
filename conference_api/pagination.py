# conference_api/pagination.py

from dataclasses import dataclass
from typing import Optional

from fastapi import Query

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 1000


@dataclass(frozen=True)
class PageParams:
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        if self.page < 1 or self.page_size < 1:
            raise ValueError("page and page_size must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def page_params(
    page: int = Query(DEFAULT_PAGE, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, alias="pageSize"),
) -> PageParams:
    return PageParams(page=page, page_size=page_size)


def optional_page_params(
    page: Optional[int] = Query(None, ge=1),
    page_size: Optional[int] = Query(None, ge=1, alias="pageSize"),
) -> Optional[PageParams]:
    """Paginate only when the caller supplied both values."""
    if page is None or page_size is None:
        return None
    return PageParams(page=page, page_size=page_size)
