# catalog_sdk/client.py
import logging
from typing import Optional, List, Dict, Any, Type
from urllib.parse import quote

import httpx
import requests
from pydantic import BaseModel, ValidationError

from .errors import CatalogError, ProductNotFound
from .models import Product, ProductPage

logger = logging.getLogger(__name__)


def _product_params(
    category: Optional[str],
    subcategory: Optional[str],
    search: Optional[str],
    limit: int,
    offset: int,
) -> Dict[str, Any]:
    params: Dict[str, Any] = {"limit": limit, "offset": offset}
    if category:
        params["category"] = category
    if subcategory:
        params["subcategory"] = subcategory
    if search:
        params["search"] = search
    return params


def _product_path(sku: str) -> str:
    return f"/api/products/{quote(sku, safe='')}"


def _decode(r, path: str):
    try:
        return r.json()
    except ValueError as e:
        raise CatalogError(f"GET {path} returned a body that is not JSON", status_code=r.status_code) from e


def _build(model: Type[BaseModel], data: Any, path: str, status_code: int):
    if not isinstance(data, dict):
        raise CatalogError(f"GET {path} returned {type(data).__name__}, expected an object", status_code=status_code)
    try:
        return model(**data)
    except ValidationError as e:
        raise CatalogError(f"GET {path} returned an unexpected {model.__name__}: {e.error_count()} errors",
                           status_code=status_code) from e


def _names(data: Any, path: str, status_code: int) -> List[str]:
    if not isinstance(data, list) or not all(isinstance(n, str) for n in data):
        raise CatalogError(f"GET {path} returned an unexpected name list", status_code=status_code)
    return data


class CatalogClient:
    """Blocking client, used by the one-shot CLI commands."""

    def __init__(self, base_url: str = "http://localhost:8085", timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None):
        try:
            r = self.session.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise CatalogError(f"GET {path} failed: {e}") from e
        return r

    def _json(self, r: requests.Response, path: str):
        try:
            r.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise CatalogError(f"GET {path} returned {r.status_code}", status_code=r.status_code) from e
        return _decode(r, path)

    def list_categories(self) -> List[str]:
        r = self._get("/api/categories")
        return _names(self._json(r, "/api/categories"), "/api/categories", r.status_code)

    def list_subcategories(self, category: Optional[str] = None) -> List[str]:
        params = {"category": category} if category else None
        r = self._get("/api/subcategories", params)
        return _names(self._json(r, "/api/subcategories"), "/api/subcategories", r.status_code)

    def list_products(self, category: Optional[str] = None, subcategory: Optional[str] = None,
                      search: Optional[str] = None, limit: int = 20, offset: int = 0) -> ProductPage:
        params = _product_params(category, subcategory, search, limit, offset)
        r = self._get("/api/products", params)
        return _build(ProductPage, self._json(r, "/api/products"), "/api/products", r.status_code)

    def get_product(self, sku: str) -> Product:
        path = _product_path(sku)
        r = self._get(path)
        if r.status_code == 404:
            raise ProductNotFound(sku)
        return _build(Product, self._json(r, path), path, r.status_code)


class AsyncCatalogClient:
    """httpx based client driven by the browsing controllers.

    ``transport`` lets tests mount an ASGI app in place of a real server.
    """

    def __init__(self, base_url: str = "http://localhost:8085", timeout: float = 10,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        try:
            r = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise CatalogError(f"GET {path} failed: {e}") from e
        logger.debug("GET %s -> %s", r.request.url, r.status_code)
        return r

    @staticmethod
    def _json(r: httpx.Response):
        path = r.request.url.path
        if r.is_error:
            raise CatalogError(f"GET {path} returned {r.status_code}", status_code=r.status_code)
        return _decode(r, path)

    async def list_categories(self) -> List[str]:
        r = await self._get("/api/categories")
        return _names(self._json(r), "/api/categories", r.status_code)

    async def list_subcategories(self, category: Optional[str] = None) -> List[str]:
        params = {"category": category} if category else None
        r = await self._get("/api/subcategories", params)
        return _names(self._json(r), "/api/subcategories", r.status_code)

    async def list_products(self, category: Optional[str] = None, subcategory: Optional[str] = None,
                            search: Optional[str] = None, limit: int = 20, offset: int = 0) -> ProductPage:
        params = _product_params(category, subcategory, search, limit, offset)
        r = await self._get("/api/products", params)
        return _build(ProductPage, self._json(r), "/api/products", r.status_code)

    async def get_product(self, sku: str) -> Product:
        r = await self._get(_product_path(sku))
        if r.status_code == 404:
            raise ProductNotFound(sku)
        return _build(Product, self._json(r), r.request.url.path, r.status_code)
