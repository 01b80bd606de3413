"""State types shared by the browsing controllers."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Union


class _NoValue:
    """Marker for an unset selection.

    Falsy, distinct from ``None`` and from ``""``. There is exactly one
    instance, :data:`NO_VALUE`, so identity checks are safe.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_VALUE"

    def __reduce__(self):
        return (_NoValue, ())


NO_VALUE = _NoValue()

Choice = Union[str, _NoValue]


def to_choice(value: Any) -> Choice:
    """Normalize a select widget value.

    ``None``, ``NO_VALUE`` and blank strings all mean "nothing selected".
    """
    if value is None or value is NO_VALUE:
        return NO_VALUE
    if not isinstance(value, str):
        raise TypeError(f"selection must be a string, got {type(value).__name__}")
    value = value.strip()
    return value if value else NO_VALUE


@dataclass(frozen=True)
class FilterState:
    category: Choice = NO_VALUE
    subcategory: Choice = NO_VALUE

    def __post_init__(self) -> None:
        for field_name in ("category", "subcategory"):
            value = getattr(self, field_name)
            if value is not NO_VALUE and (not isinstance(value, str) or not value):
                raise ValueError(f"{field_name} must be a non-empty string or NO_VALUE")
        if self.category is NO_VALUE and self.subcategory is not NO_VALUE:
            raise ValueError("subcategory requires a category")


@dataclass(frozen=True)
class SearchState:
    raw_text: str = ""
    debounced_text: str = ""


@dataclass(frozen=True)
class PageState:
    current_page: int = 1
    total_pages: int = 1

    def __post_init__(self) -> None:
        if self.current_page < 1 or self.total_pages < 1:
            raise ValueError("pages are numbered from 1")


@dataclass(frozen=True)
class ProductRef:
    sku: str


def total_pages_for(total: int, limit: int) -> int:
    if limit <= 0:
        raise ValueError("limit must be positive")
    return max(1, math.ceil(max(total, 0) / limit))
