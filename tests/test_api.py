"""Tests for the storefront stock/catalog API client"""
import httpx
import pytest
import respx
from decimal import Decimal

from storefront.services.api import StorefrontApi, StorefrontApiError

BASE_URL = "http://storefront.test"


@pytest.mark.asyncio
@respx.mock
async def test_get_stock():
    respx.get(f"{BASE_URL}/stock/1").respond(200, json={"id": 1, "amount": 3})

    async with StorefrontApi(base_url=BASE_URL) as api:
        stock = await api.get_stock(1)

    assert stock.id == 1
    assert stock.amount == 3


@pytest.mark.asyncio
@respx.mock
async def test_get_stock_not_found():
    respx.get(f"{BASE_URL}/stock/42").respond(404, json={})

    async with StorefrontApi(base_url=BASE_URL) as api:
        assert await api.get_stock(42) is None


@pytest.mark.asyncio
@respx.mock
async def test_get_stock_server_error_raises():
    respx.get(f"{BASE_URL}/stock/1").respond(500)

    async with StorefrontApi(base_url=BASE_URL) as api:
        with pytest.raises(httpx.HTTPStatusError):
            await api.get_stock(1)


@pytest.mark.asyncio
@respx.mock
async def test_get_product_maps_catalog_fields():
    respx.get(f"{BASE_URL}/products/2").respond(200, json={
        "id": 2,
        "title": "Tênis VR Caminhada Confortável",
        "price": 139.9,
        "image": "https://images.test/2.jpg",
    })

    async with StorefrontApi(base_url=BASE_URL) as api:
        product = await api.get_product(2)

    assert product.id == 2
    assert product.name == "Tênis VR Caminhada Confortável"
    assert product.price == Decimal("139.9")
    assert product.image_url == "https://images.test/2.jpg"


@pytest.mark.asyncio
@respx.mock
async def test_get_product_empty_body():
    respx.get(f"{BASE_URL}/products/2").respond(200, content=b"")

    async with StorefrontApi(base_url=BASE_URL) as api:
        assert await api.get_product(2) is None


@pytest.mark.asyncio
@respx.mock
async def test_get_product_non_object_raises():
    respx.get(f"{BASE_URL}/products/2").respond(200, json=[1, 2])

    async with StorefrontApi(base_url=BASE_URL) as api:
        with pytest.raises(StorefrontApiError):
            await api.get_product(2)


@pytest.mark.asyncio
@respx.mock
async def test_connection_error_propagates():
    respx.get(f"{BASE_URL}/stock/1").mock(side_effect=httpx.ConnectError("refused"))

    async with StorefrontApi(base_url=BASE_URL) as api:
        with pytest.raises(httpx.ConnectError):
            await api.get_stock(1)


@pytest.mark.asyncio
async def test_injected_client_not_closed():
    client = httpx.AsyncClient()
    api = StorefrontApi(base_url=BASE_URL, client=client)

    await api.aclose()

    assert not client.is_closed
    await client.aclose()


def test_default_base_url_from_environment():
    # conftest seeds STOREFRONT_API_URL before the module is imported
    assert StorefrontApi().base_url == BASE_URL
