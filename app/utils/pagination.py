from typing import NamedTuple, Optional

from app.core.config import settings

# Largest value a BIGINT column or bound parameter can hold.
MAX_ID = 2**63 - 1


class PageWindow(NamedTuple):
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def normalize_page(page: Optional[int], page_size: Optional[int]) -> PageWindow:
    """Coerce page/page size into the window every listing uses.

    Pages start at 1, a missing or non-positive size falls back to the default
    and sizes above the maximum are capped. Pages whose offset would not fit a
    BIGINT are clamped to the last one that does.
    """
    if page is None or page < 1:
        page = 1
    if page_size is None or page_size < 1:
        page_size = settings.DEFAULT_PAGE_SIZE
    if page_size > settings.MAX_PAGE_SIZE:
        page_size = settings.MAX_PAGE_SIZE
    # keep the offset inside the BIGINT range; such pages are empty anyway
    page = min(page, MAX_ID // page_size + 1)
    return PageWindow(page=page, page_size=page_size)
