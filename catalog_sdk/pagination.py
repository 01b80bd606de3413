"""Offset/limit pagination with the page number mirrored into the URL."""
import logging
from typing import Optional

from .navigation import BrowserHistory
from .state import PageState, total_pages_for

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
PAGE_PARAM = "page"


def parse_page(raw: Optional[str]) -> int:
    try:
        page = int(raw) if raw is not None else 1
    except ValueError:
        return 1
    return page if page >= 1 else 1


class PaginationController:
    def __init__(self, limit: int = DEFAULT_LIMIT, history: Optional[BrowserHistory] = None):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self.history = history
        self.current_page = 1
        self.total_pages = 1

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.limit

    @property
    def snapshot(self) -> PageState:
        return PageState(current_page=self.current_page, total_pages=self.total_pages)

    def from_location(self) -> int:
        """Adopt the page number carried by the current URL.

        Only the page is restored; filters and search start empty. The total
        is unknown until the first response, so this page is requested as is
        and clamped by ``apply_total`` if it turns out to be past the end.
        """
        if self.history is not None:
            self.current_page = parse_page(self.history.param(PAGE_PARAM))
        return self.current_page

    def next_page(self) -> bool:
        return self._set_page(min(self.current_page + 1, self.total_pages))

    def prev_page(self) -> bool:
        return self._set_page(max(self.current_page - 1, 1))

    def go_to(self, page: int) -> bool:
        return self._set_page(min(max(page, 1), self.total_pages))

    def reset(self) -> bool:
        return self._set_page(1)

    def collapse(self) -> None:
        """Fall back to a single page without rewriting the URL.

        Used when a fetch fails, so a reload can still retry the page in the URL.
        """
        self.current_page = 1
        self.total_pages = 1

    def apply_total(self, total: int) -> bool:
        """Recompute the page count; returns True when the current page had to move."""
        self.total_pages = total_pages_for(total, self.limit)
        if self.current_page > self.total_pages:
            logger.debug("page %s out of range, clamping to %s", self.current_page, self.total_pages)
            return self._set_page(self.total_pages)
        return False

    def _set_page(self, page: int) -> bool:
        if page == self.current_page:
            return False
        self.current_page = page
        self._sync_location()
        return True

    def _sync_location(self) -> None:
        if self.history is None:
            return
        url = self.history.url.copy_set_param(PAGE_PARAM, str(self.current_page))
        self.history.replace(str(url))
