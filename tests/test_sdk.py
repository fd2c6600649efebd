# tests/test_sdk.py
import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from sdk.products import ProductApiError, ProductClient

BASE = "http://testserver"


@pytest.fixture
def sdk(app, auth):
    return ProductClient(base_url=BASE, api_key=auth["x-api-key"], session=TestClient(app))


def test_crud_through_client(sdk):
    created = sdk.create_product("Mug", "Ceramic mug", 8, "kitchen")
    assert sdk.get_product(created["id"])["name"] == "Mug"

    replaced = sdk.replace_product(created["id"], "Big Mug", "Ceramic mug, 500ml", 10, "kitchen", False)
    assert replaced["inStock"] is False

    assert sdk.stats()["kitchen"] == 2
    assert sdk.search_products("mug")["total"] == 1
    assert sdk.list_products(category="kitchen", page=1, limit=1)["limit"] == 1

    deleted = sdk.delete_product(created["id"])
    assert deleted["product"]["id"] == created["id"]
    with pytest.raises(ProductApiError) as exc:
        sdk.get_product(created["id"])
    assert exc.value.status_code == 404
    assert exc.value.message == "Product not found"


def test_client_without_key_gets_401(app):
    anon = ProductClient(base_url=BASE, session=TestClient(app))
    with pytest.raises(ProductApiError) as exc:
        anon.delete_product("1")
    assert exc.value.status_code == 401


def test_async_paths(app, auth, store):
    transport = httpx.ASGITransport(app=app)
    client = ProductClient(base_url=BASE, api_key=auth["x-api-key"], session=TestClient(app))

    async def run():
        created = await client.create_product_async("Fan", "Desk fan", 25.0, "Appliances", transport=transport)
        page = await client.list_products_async(category="appliances", transport=transport)
        return created, page

    created, page = asyncio.run(run())
    assert page["total"] == 1
    assert page["data"][0]["id"] == created["id"]
    assert len(store) == 4
