"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock, AsyncMock

# Set test environment variables
os.environ.setdefault("STOREFRONT_API_URL", "http://storefront.test")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")

from storefront.cart import Cart, CartItem, CartManager, CartSnapshotStore, MemorySnapshotBackend
from storefront.services.models import Product, Stock
from storefront.services.notifications import RecordingNotificationSink


@pytest.fixture
def sample_product():
    """Sample catalog product"""
    return Product(
        id=1,
        name="Tênis de Caminhada Leve Confortável",
        price=179.9,
        image_url="https://images.test/sneaker-1.jpg",
    )


@pytest.fixture
def stock_levels():
    """Stock amount per product id; tests mutate it to shape each scenario"""
    return {1: 5, 2: 10, 3: 2}


@pytest.fixture
def mock_api(stock_levels, sample_product):
    """Mock storefront API backed by stock_levels"""
    api = Mock()

    async def get_stock(product_id):
        if product_id not in stock_levels:
            return None
        return Stock(id=product_id, amount=stock_levels[product_id])

    async def get_product(product_id):
        return sample_product.model_copy(update={
            "id": product_id,
            "name": f"Product {product_id}",
        })

    api.get_stock = AsyncMock(side_effect=get_stock)
    api.get_product = AsyncMock(side_effect=get_product)
    return api


@pytest.fixture
def backend():
    """In-memory snapshot backend"""
    return MemorySnapshotBackend()


@pytest.fixture
def store(backend):
    """Snapshot store for the test session"""
    return CartSnapshotStore(backend, session_id="test")


@pytest.fixture
def notifier():
    """Notification sink that records messages"""
    return RecordingNotificationSink()


def _make_item(product_id: int, amount: int, price: str = "100.00") -> CartItem:
    return CartItem(
        id=product_id,
        name=f"Product {product_id}",
        price=price,
        image_url=f"https://images.test/{product_id}.jpg",
        amount=amount,
    )


@pytest.fixture
def make_item():
    """Factory for line items"""
    return _make_item


@pytest.fixture
def make_manager(mock_api, store, notifier):
    """Factory for a CartManager seeded with line items"""
    def _make(*items: CartItem) -> CartManager:
        return CartManager(mock_api, store, notifier, cart=Cart(items))
    return _make
