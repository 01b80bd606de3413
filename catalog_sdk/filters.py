import logging
from dataclasses import replace
from typing import Any, List, Tuple

from .errors import CatalogError, FilterError
from .state import NO_VALUE, FilterState, to_choice

logger = logging.getLogger(__name__)

CATEGORY_PLACEHOLDER = "All categories"
SUBCATEGORY_PLACEHOLDER = "All subcategories"


class FilterController:
    """Owns the category/subcategory selection and the scoped subcategory list."""

    def __init__(self, client):
        self.client = client
        self.state = FilterState()
        self.subcategory_options: List[str] = []
        self._issued = 0

    @property
    def category(self):
        return self.state.category

    @property
    def subcategory(self):
        return self.state.subcategory

    async def select_category(self, value: Any) -> List[str]:
        category = to_choice(value)
        if category is NO_VALUE:
            self.clear()
            return []

        self.state = FilterState(category=category)
        self.subcategory_options = []
        self._issued += 1
        issued = self._issued
        try:
            options = await self.client.list_subcategories(category)
        except CatalogError as e:
            logger.warning("subcategory lookup for %r failed: %s", category, e)
            options = []
        if issued != self._issued:
            logger.debug("discarding stale subcategories for %r", category)
            return self.subcategory_options
        self.subcategory_options = list(options)
        return self.subcategory_options

    def select_subcategory(self, value: Any) -> None:
        subcategory = to_choice(value)
        if subcategory is NO_VALUE:
            self.state = replace(self.state, subcategory=NO_VALUE)
            return
        if self.state.category is NO_VALUE:
            raise FilterError("select a category before a subcategory")
        if subcategory not in self.subcategory_options:
            raise FilterError(f"{subcategory!r} is not a subcategory of {self.state.category!r}")
        self.state = replace(self.state, subcategory=subcategory)

    def clear(self) -> None:
        # Invalidates any subcategory lookup still in flight.
        self._issued += 1
        self.state = FilterState()
        self.subcategory_options = []

    def labels(self) -> Tuple[str, str]:
        category = self.state.category or CATEGORY_PLACEHOLDER
        subcategory = self.state.subcategory or SUBCATEGORY_PLACEHOLDER
        return category, subcategory
