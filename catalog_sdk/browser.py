"""The catalog listing page: filters, debounced search and pagination wired
to the products endpoint.

Every products request gets an increasing issue number. Only the response
to the most recently issued request is applied; late answers to older
requests are dropped, whatever order they arrive in.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Set

from .config import Settings, settings as default_settings
from .debounce import DebouncedSearch
from .errors import CatalogError
from .filters import FilterController
from .images import ImageHostPolicy
from .links import ProductDetail, ProductDetailLoader, product_link
from .models import Product
from .navigation import BrowserHistory
from .pagination import PaginationController

logger = logging.getLogger(__name__)


class CatalogBrowser:
    def __init__(self, client, settings: Optional[Settings] = None,
                 history: Optional[BrowserHistory] = None):
        self.settings = settings or default_settings
        self.client = client
        self.history = history or BrowserHistory("/")
        self.filters = FilterController(client)
        self.search = DebouncedSearch(self.settings.debounce_seconds, on_commit=self._search_committed)
        self.pages = PaginationController(self.settings.page_size, self.history)
        self.images = ImageHostPolicy(self.settings.image_hosts)
        self.details = ProductDetailLoader(client)

        self.categories: List[str] = []
        self.items: List[Product] = []
        self.total = 0
        self.error: Optional[str] = None
        self._issued = 0
        self._inflight: Set[asyncio.Task] = set()

    # ---------------------------
    # Lifecycle
    # ---------------------------
    async def mount(self) -> None:
        self.pages.from_location()
        try:
            self.categories = await self.client.list_categories()
        except CatalogError as e:
            logger.warning("category lookup failed: %s", e)
            self.categories = []
        await self.refresh()

    async def settle(self) -> None:
        await self.search.wait()
        running = [t for t in self._inflight if not t.done()]
        if running:
            await asyncio.gather(*running)

    # ---------------------------
    # Query and fetch
    # ---------------------------
    def query(self) -> Dict[str, Any]:
        state = self.filters.state
        return {
            "category": state.category or None,
            "subcategory": state.subcategory or None,
            "search": self.search.debounced_text or None,
            "limit": self.pages.limit,
            "offset": self.pages.offset,
        }

    async def refresh(self) -> bool:
        """Fetch the current page. Returns False when the response was stale."""
        task = asyncio.ensure_future(self._fetch())
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return await task

    async def _fetch(self) -> bool:
        self._issued += 1
        issued = self._issued
        query = self.query()
        try:
            page = await self.client.list_products(**query)
        except CatalogError as e:
            if issued != self._issued:
                return False
            logger.warning("product fetch failed: %s", e)
            self.items = []
            self.total = 0
            self.error = str(e)
            self.pages.collapse()
            return True

        if issued != self._issued:
            logger.debug("discarding stale products response (request %s, latest %s)", issued, self._issued)
            return False

        self.items = list(page.items)
        self.total = page.total
        self.error = None
        if self.pages.apply_total(page.total):
            return await self._fetch()
        return True

    # ---------------------------
    # User actions
    # ---------------------------
    async def select_category(self, value: Any) -> List[str]:
        options = await self.filters.select_category(value)
        self.pages.reset()
        await self.refresh()
        return options

    async def select_subcategory(self, value: Any) -> None:
        self.filters.select_subcategory(value)
        self.pages.reset()
        await self.refresh()

    async def clear_filters(self) -> None:
        self.filters.clear()
        self.pages.reset()
        await self.refresh()

    def type_search(self, text: str) -> None:
        self.search.update(text)

    async def submit_search(self, text: str) -> None:
        """Search for ``text`` now, as pressing enter does."""
        self.search.update(text)
        self.search.flush()
        await self.settle()

    async def _search_committed(self, text: str) -> None:
        self.pages.reset()
        await self.refresh()

    async def next_page(self) -> bool:
        if not self.pages.next_page():
            return False
        await self.refresh()
        return True

    async def prev_page(self) -> bool:
        if not self.pages.prev_page():
            return False
        await self.refresh()
        return True

    async def go_to_page(self, page: int) -> bool:
        if not self.pages.go_to(page):
            return False
        await self.refresh()
        return True

    # ---------------------------
    # Products
    # ---------------------------
    def product_link(self, product: Any) -> str:
        return product_link(product)

    def image_for(self, product: Product) -> Optional[str]:
        return self.images.resolve(product.image_url)

    async def open_product(self, product: Any) -> ProductDetail:
        """Navigate to the detail page and load it from the SKU in the URL."""
        url = self.product_link(product)
        self.history.push(url)
        return await self.details.load(url)
