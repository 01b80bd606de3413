"""Product navigation by SKU.

Links carry the SKU and nothing else; the detail page fetches the product
itself. Lookups that cannot find a product end in a ``not_found`` detail
rather than an exception.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import httpx

from .errors import CatalogError, ProductNotFound
from .models import Product
from .state import ProductRef

logger = logging.getLogger(__name__)

PRODUCT_PATH = "/product"
SKU_PARAM = "sku"

FOUND = "found"
NOT_FOUND = "not_found"
ERROR = "error"


def product_ref(product: Any) -> ProductRef:
    if isinstance(product, ProductRef):
        sku = product.sku
    elif isinstance(product, Mapping):
        sku = product.get("sku")
    else:
        sku = getattr(product, "sku", None)
    if not isinstance(sku, str) or not sku.strip():
        raise ValueError("product has no sku")
    return ProductRef(sku=sku.strip())


def product_link(product: Any, path: str = PRODUCT_PATH) -> str:
    ref = product_ref(product)
    return str(httpx.URL(path, params={SKU_PARAM: ref.sku}))


@dataclass(frozen=True)
class ProductDetail:
    status: str
    sku: Optional[str] = None
    product: Optional[Product] = None
    message: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == FOUND


class ProductDetailLoader:
    def __init__(self, client):
        self.client = client

    async def load(self, url: str) -> ProductDetail:
        try:
            sku = httpx.URL(url).params.get(SKU_PARAM)
        except httpx.InvalidURL:
            sku = None
        if sku is None or not sku.strip():
            return ProductDetail(status=NOT_FOUND, message="no product selected")
        return await self.load_sku(sku.strip())

    async def load_sku(self, sku: str) -> ProductDetail:
        try:
            product = await self.client.get_product(sku)
        except ProductNotFound:
            return ProductDetail(status=NOT_FOUND, sku=sku, message="product not found")
        except CatalogError as e:
            logger.warning("product lookup for %r failed: %s", sku, e)
            return ProductDetail(status=ERROR, sku=sku, message=str(e))
        return ProductDetail(status=FOUND, sku=sku, product=product)
