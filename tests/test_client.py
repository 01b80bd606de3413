import asyncio
import json

import httpx
import pytest
import requests

from catalog_sdk.client import AsyncCatalogClient, CatalogClient
from catalog_sdk.errors import CatalogError, ProductNotFound


def _mock_client(handler):
    return AsyncCatalogClient("http://test", transport=httpx.MockTransport(handler))


def test_category_is_percent_encoded():
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, json=["Lighting", "Outdoor"])

    async def run():
        async with _mock_client(handler) as client:
            return await client.list_subcategories("Home & Garden")

    assert asyncio.run(run()) == ["Lighting", "Outdoor"]
    assert b"%26" in seen[0].query
    assert seen[0].params["category"] == "Home & Garden"


def test_unset_filters_are_not_sent():
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, json={"items": [], "total": 0, "limit": 20, "offset": 40})

    async def run():
        async with _mock_client(handler) as client:
            return await client.list_products(category=None, subcategory="", search=None, limit=20, offset=40)

    page = asyncio.run(run())
    assert page.offset == 40
    assert dict(seen[0].params) == {"limit": "20", "offset": "40"}


def test_async_404_maps_to_product_not_found():
    async def run():
        async with _mock_client(lambda request: httpx.Response(404, json={"detail": "product not found"})) as client:
            await client.get_product("NOPE")

    with pytest.raises(ProductNotFound) as exc:
        asyncio.run(run())
    assert exc.value.sku == "NOPE"


def test_async_server_error_maps_to_catalog_error():
    async def run():
        async with _mock_client(lambda request: httpx.Response(500)) as client:
            await client.list_categories()

    with pytest.raises(CatalogError) as exc:
        asyncio.run(run())
    assert exc.value.status_code == 500


def test_async_transport_error_maps_to_catalog_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def run():
        async with _mock_client(handler) as client:
            await client.list_products()

    with pytest.raises(CatalogError):
        asyncio.run(run())


def _response(status, body):
    r = requests.Response()
    r.status_code = status
    r._content = json.dumps(body).encode()
    return r


def test_sync_client_maps_errors(monkeypatch):
    c = CatalogClient("http://test")
    monkeypatch.setattr(c.session, "get", lambda *a, **kw: _response(404, {"detail": "product not found"}))
    with pytest.raises(ProductNotFound):
        c.get_product("NOPE")

    def refuse(*a, **kw):
        raise requests.exceptions.ConnectionError("connection refused")

    monkeypatch.setattr(c.session, "get", refuse)
    with pytest.raises(CatalogError):
        c.list_categories()


def test_sync_client_parses_pages(monkeypatch):
    c = CatalogClient("http://test")
    body = {"items": [{"sku": "A1", "name": "A", "category": "c", "subcategory": "s"}], "total": 1, "limit": 20}
    monkeypatch.setattr(c.session, "get", lambda *a, **kw: _response(200, body))
    page = c.list_products(category="c")
    assert page.total == 1
    assert page.items[0].sku == "A1"


def _html(request):
    return httpx.Response(200, text="<html>gateway</html>", headers={"content-type": "text/html"})


def test_async_non_json_body_maps_to_catalog_error():
    async def run():
        async with _mock_client(_html) as client:
            await client.list_products()

    with pytest.raises(CatalogError) as exc:
        asyncio.run(run())
    assert exc.value.status_code == 200


def test_async_wrong_shape_maps_to_catalog_error():
    bodies = {
        "/api/products": {"items": [{"sku": 1}], "total": 1, "limit": 20},
        "/api/products/SP-1001": ["not", "an", "object"],
        "/api/categories": {"names": []},
    }

    def handler(request):
        return httpx.Response(200, json=bodies[request.url.path])

    async def run():
        errors = []
        async with _mock_client(handler) as client:
            for call in (client.list_products(), client.get_product("SP-1001"), client.list_categories()):
                try:
                    await call
                except CatalogError as e:
                    errors.append(e.status_code)
        return errors

    assert asyncio.run(run()) == [200, 200, 200]


def test_sync_client_rejects_malformed_bodies(monkeypatch):
    c = CatalogClient("http://test")
    html = requests.Response()
    html.status_code = 200
    html._content = b"<html>gateway</html>"
    monkeypatch.setattr(c.session, "get", lambda *a, **kw: html)
    with pytest.raises(CatalogError):
        c.list_products()

    monkeypatch.setattr(c.session, "get", lambda *a, **kw: _response(200, {"items": [{"sku": 1}], "total": 1}))
    with pytest.raises(CatalogError):
        c.list_products()
