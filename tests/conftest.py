# tests/conftest.py
import asyncio
from typing import Any, Dict, List

import httpx
import pytest

from catalog_api.database import PRODUCTS, load_products
from catalog_api.main import app
from catalog_sdk.client import AsyncCatalogClient
from catalog_sdk.errors import CatalogError
from catalog_sdk.models import Product, ProductPage

SAMPLE = [
    {"sku": "EL-1001", "name": "Wireless Mouse", "category": "Electronics", "subcategory": "Accessories",
     "price_cents": 2499, "image_url": "https://images.example-cdn.com/el-1001.jpg"},
    {"sku": "EL-1002", "name": "Mechanical Keyboard", "category": "Electronics", "subcategory": "Accessories",
     "price_cents": 8999},
    {"sku": "EL-2001", "name": "27in Monitor", "category": "Electronics", "subcategory": "Displays",
     "price_cents": 27900, "image_url": "http://untrusted.example.net/el-2001.jpg"},
    {"sku": "HG-1001", "name": "Garden Hose", "category": "Home & Garden", "subcategory": "Outdoor",
     "price_cents": 3450},
    {"sku": "HG-2001", "name": "Table Lamp", "category": "Home & Garden", "subcategory": "Lighting",
     "price_cents": 4200},
    {"sku": "SP-1001", "name": "Yoga Mat", "category": "Sports", "subcategory": "Fitness",
     "price_cents": 2999},
    {"sku": "SP-2001", "name": "Trail Shoes", "category": "Sports", "subcategory": "Running",
     "price_cents": 11900},
]


def _bulk(n: int) -> List[Dict[str, Any]]:
    return [
        {"sku": f"BK-{i:03d}", "name": f"Bulk item {i:03d}", "category": "Bulk",
         "subcategory": "Crates" if i % 2 else "Boxes", "price_cents": 100 + i}
        for i in range(n)
    ]


@pytest.fixture
def catalog():
    PRODUCTS.clear()
    load_products(SAMPLE)
    yield PRODUCTS
    PRODUCTS.clear()


@pytest.fixture
def bulk_catalog():
    # 45 products: three pages of 20
    PRODUCTS.clear()
    load_products(_bulk(45))
    yield PRODUCTS
    PRODUCTS.clear()


class RecordingClient(AsyncCatalogClient):
    """Async client bound to the in-process app that records every call."""

    def __init__(self):
        super().__init__("http://test", transport=httpx.ASGITransport(app=app))
        self.product_queries: List[Dict[str, Any]] = []
        self.subcategory_queries: List[str] = []

    async def list_products(self, **query):
        self.product_queries.append(query)
        return await super().list_products(**query)

    async def list_subcategories(self, category=None):
        self.subcategory_queries.append(category)
        return await super().list_subcategories(category)


class BrokenClient:
    """Every request fails the way a dropped connection would."""

    async def list_categories(self):
        raise CatalogError("connection refused")

    async def list_subcategories(self, category=None):
        raise CatalogError("connection refused")

    async def list_products(self, **query):
        raise CatalogError("connection refused")

    async def get_product(self, sku):
        raise CatalogError("connection refused")


class GatedClient:
    """Holds each products/subcategories response until the test releases it."""

    def __init__(self):
        self.gates: List[asyncio.Event] = []
        self.calls: List[Any] = []

    async def _held(self, result):
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return result

    async def list_subcategories(self, category=None):
        self.calls.append(category)
        return await self._held([f"{category}-sub"])

    async def list_products(self, **query):
        self.calls.append(query)
        tag = f"req{len(self.calls)}"
        item = Product(sku=tag, name=tag, category="c", subcategory="s")
        return await self._held(ProductPage(items=[item], total=1, limit=query["limit"]))


@pytest.fixture
def recording_client():
    return RecordingClient


@pytest.fixture
def broken_client():
    return BrokenClient()


@pytest.fixture
def gated_client():
    return GatedClient()
