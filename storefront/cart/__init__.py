"""Cart package: models, snapshot storage, and the cart engine."""
from .models import CartItem, Cart
from .service import CartManager, CartResult, CartStatus, create_cart_manager
from .storage import CartSnapshotStore, CartStorageError, MemorySnapshotBackend, RedisSnapshotBackend

__all__ = [
    "CartItem",
    "Cart",
    "CartManager",
    "CartResult",
    "CartStatus",
    "create_cart_manager",
    "CartSnapshotStore",
    "CartStorageError",
    "MemorySnapshotBackend",
    "RedisSnapshotBackend",
]
